# review/views.py
import logging
from contextlib import contextmanager

from django.core.exceptions import ValidationError as DjangoValidationError
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import permissions, serializers, status, viewsets
from rest_framework.exceptions import APIException, NotFound
from rest_framework.filters import OrderingFilter, SearchFilter

from . import services
from .exceptions import DuplicateReviewError, ReviewNotFoundError, StoreUnavailableError
from .models import Review
from .serializers import ReviewSerializer

logger = logging.getLogger(__name__)


class ReviewConflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "You have already reviewed this product."
    default_code = "duplicate_review"


class StoreUnavailable(APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Review storage is temporarily unavailable, try again later."
    default_code = "store_unavailable"


@contextmanager
def review_errors_as_api_errors():
    try:
        yield
    except DuplicateReviewError as exc:
        raise ReviewConflict(str(exc))
    except ReviewNotFoundError as exc:
        raise NotFound(str(exc))
    except DjangoValidationError as exc:
        raise serializers.ValidationError(getattr(exc, "message_dict", None) or exc.messages)
    except StoreUnavailableError:
        logger.exception("Review store unavailable")
        raise StoreUnavailable()


class IsAuthorOrReadOnly(permissions.BasePermission):
    def has_object_permission(self, request, view, obj):
        if request.method in permissions.SAFE_METHODS:
            return True
        return obj.author_id == request.user.id


class ReviewViewSet(viewsets.ModelViewSet):
    queryset = Review.objects.select_related("author", "product").all()
    serializer_class = ReviewSerializer
    permission_classes = [permissions.IsAuthenticatedOrReadOnly, IsAuthorOrReadOnly]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_fields = ["product", "rating"]
    search_fields = ["title", "comment", "author__name", "product__name"]
    ordering_fields = ["created_at", "rating"]

    def perform_create(self, serializer):
        with review_errors_as_api_errors():
            serializer.instance = services.create_review(
                author=self.request.user, **serializer.validated_data
            )

    def perform_update(self, serializer):
        with review_errors_as_api_errors():
            serializer.instance = services.update_review(
                serializer.instance.pk, **serializer.validated_data
            )

    def perform_destroy(self, instance):
        with review_errors_as_api_errors():
            services.delete_review(instance.pk)
