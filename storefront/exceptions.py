class CatalogError(Exception):
    """Base class for failures talking to the product store."""


class ProductFetchError(CatalogError):
    """The store could not be reached or rejected a read."""


class ProductNotFound(CatalogError):
    def __init__(self, product_id: str):
        super().__init__(f"Product {product_id!r} not found")
        self.product_id = product_id


class ReviewWriteError(CatalogError):
    """A review insert failed or came back empty."""
