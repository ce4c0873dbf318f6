# ==================== UTILS/PAGINATION.PY ====================
import math

from django.conf import settings
from rest_framework.pagination import BasePagination
from rest_framework.response import Response

from .parsing import parse_positive_int


def page_bounds(page, page_size):
    """Slice bounds of a 1-based page"""
    start = (page - 1) * page_size
    return start, start + page_size


def page_count(total, page_size):
    return math.ceil(total / page_size)


class StandardResultsPagination(BasePagination):
    """Page/limit pagination that reports the total and page count.

    Pages past the end come back empty rather than as a 404.
    """
    page_query_param = 'page'
    limit_query_param = 'limit'

    @property
    def default_limit(self):
        return settings.PAGINATION_DEFAULT_LIMIT

    @property
    def max_limit(self):
        return settings.PAGINATION_MAX_LIMIT

    def get_page_number(self, request):
        return parse_positive_int(request.query_params.get(self.page_query_param), 1)

    def get_limit(self, request):
        limit = parse_positive_int(request.query_params.get(self.limit_query_param), self.default_limit)
        return min(limit, self.max_limit)

    def set_page(self, page, limit, total):
        """Record the page that was served, for the response envelope"""
        self.page = page
        self.limit = limit
        self.total = total

    def paginate_queryset(self, queryset, request, view=None):
        page = self.get_page_number(request)
        limit = self.get_limit(request)
        self.set_page(page, limit, queryset.count())
        start, end = page_bounds(page, limit)
        return list(queryset[start:end])

    def get_paginated_response(self, data):
        pages = page_count(self.total, self.limit)
        return Response({
            'success': True,
            'data': data,
            'pagination': {
                'page': self.page,
                'limit': self.limit,
                'total': self.total,
                'pages': pages,
                'has_next': self.page < pages,
                'has_prev': self.page > 1,
            }
        })

    def get_paginated_response_schema(self, schema):
        return {
            'type': 'object',
            'properties': {
                'success': {'type': 'boolean'},
                'data': schema,
                'pagination': {
                    'type': 'object',
                    'properties': {
                        'page': {'type': 'integer'},
                        'limit': {'type': 'integer'},
                        'total': {'type': 'integer'},
                        'pages': {'type': 'integer'},
                        'has_next': {'type': 'boolean'},
                        'has_prev': {'type': 'boolean'},
                    },
                },
            },
        }
