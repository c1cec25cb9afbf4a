from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class NeighborhoodPagination(PageNumberPagination):
    """Page-number pagination with a ``limit`` page-size parameter.

    The envelope carries the total count and page numbers so list screens can
    render pagers without a second request.
    """

    page_size = 10
    page_size_query_param = "limit"
    max_page_size = 100

    def get_paginated_response(self, data):
        return Response(
            {
                "count": self.page.paginator.count,
                "total_pages": self.page.paginator.num_pages,
                "current_page": self.page.number,
                "next": self.get_next_link(),
                "previous": self.get_previous_link(),
                "results": data,
            },
        )

    def get_paginated_response_schema(self, schema):
        response_schema = super().get_paginated_response_schema(schema)
        response_schema["properties"]["total_pages"] = {
            "type": "integer",
            "example": 3,
        }
        response_schema["properties"]["current_page"] = {
            "type": "integer",
            "example": 1,
        }
        return response_schema
