# backend/pagination.py

"""
PAGE / LIMIT PAGINATION

Query params:
- page  (>= 1, default 1)
- limit (1..100, default PAGE_SIZE or the view's `page_size`)

Response shape:
    {"data": [...], "pagination": {"page", "limit", "total", "totalPages"}}

A page past the end returns an empty list rather than a 404.
"""

from __future__ import annotations

import math

from django.conf import settings
from rest_framework import serializers
from rest_framework.pagination import BasePagination
from rest_framework.response import Response

MAX_LIMIT = 100


class PaginationQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(required=False, min_value=1, default=1)
    limit = serializers.IntegerField(
        required=False, min_value=1, max_value=MAX_LIMIT, allow_null=True, default=None
    )


class StorefrontPagination(BasePagination):
    page_size = None

    def _default_limit(self, view) -> int:
        return (
            getattr(view, "page_size", None)
            or self.page_size
            or settings.REST_FRAMEWORK.get("PAGE_SIZE")
            or 12
        )

    def paginate_queryset(self, queryset, request, view=None):
        query = PaginationQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        self.page = query.validated_data["page"]
        self.limit = query.validated_data["limit"] or self._default_limit(view)
        self.total = queryset.count()

        offset = (self.page - 1) * self.limit
        return list(queryset[offset : offset + self.limit])

    def get_paginated_response(self, data):
        return Response(
            {
                "data": data,
                "pagination": {
                    "page": self.page,
                    "limit": self.limit,
                    "total": self.total,
                    "totalPages": math.ceil(self.total / self.limit) if self.total else 0,
                },
            }
        )

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "properties": {
                "data": schema,
                "pagination": {
                    "type": "object",
                    "properties": {
                        "page": {"type": "integer"},
                        "limit": {"type": "integer"},
                        "total": {"type": "integer"},
                        "totalPages": {"type": "integer"},
                    },
                },
            },
        }

    def get_schema_operation_parameters(self, view):
        return [
            {
                "name": "page",
                "required": False,
                "in": "query",
                "schema": {"type": "integer", "minimum": 1},
            },
            {
                "name": "limit",
                "required": False,
                "in": "query",
                "schema": {"type": "integer", "minimum": 1, "maximum": MAX_LIMIT},
            },
        ]
