from rest_framework import viewsets, permissions
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.response import Response

from review.serializers import ReviewSerializer
from review.services import get_product_reviews
from .models import Product
from .serializers import ProductSerializer


class ProductViewSet(viewsets.ModelViewSet):
    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    filter_backends = [OrderingFilter, SearchFilter]
    ordering_fields = ["created_at", "price", "avg_rating", "review_count"]
    search_fields = ["name"]

    def get_permissions(self):
        if self.request.method in permissions.SAFE_METHODS:
            return [permissions.AllowAny()]
        return [permissions.IsAdminUser()]

    @action(detail=True, methods=["get"])
    def reviews(self, request, pk=None):
        """
        Reviews of one product, newest first.
        GET /api/v1/products/<id>/reviews/
        """
        product = self.get_object()
        qs = get_product_reviews(product.pk)
        page = self.paginate_queryset(qs)
        serializer = ReviewSerializer(page if page is not None else qs, many=True, context={"request": request})
        if page is not None:
            return self.get_paginated_response(serializer.data)
        return Response(serializer.data)
