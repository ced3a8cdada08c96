import math
from sqlalchemy.orm import Query


def paginate(query: Query, page: int, size: int):
    """Return ``(items, page_info)`` for a zero-indexed page of the query."""
    total = query.order_by(None).count()
    items = query.offset(page * size).limit(size).all()
    total_pages = math.ceil(total / size) if size else 0
    page_info = {
        "current_page": page,
        "total_pages": total_pages,
        "total_elements": total,
        "page_size": size,
        "is_first": page == 0,
        "is_last": page + 1 >= total_pages,
    }
    return items, page_info
