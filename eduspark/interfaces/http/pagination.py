from fastapi import Query


class Pagination:
    """`page` is zero-based; without `size` the whole result is returned."""

    def __init__(self, page: int = Query(0, ge=0), size: int | None = Query(None, ge=1, le=100)):
        self.page = page
        self.size = size

    def apply(self, cursor):
        if self.size is None:
            return cursor
        return cursor.skip(self.page * self.size).limit(self.size)
