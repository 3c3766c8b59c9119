from rest_framework.pagination import PageNumberPagination


class StandardResultsSetPagination(PageNumberPagination):
    """Page-number pagination for report and audit listings.

    `?page_size=` is honoured up to 200 rows per page.
    """

    page_size_query_param = "page_size"
    max_page_size = 200
