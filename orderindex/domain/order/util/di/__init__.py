from orderindex.domain.order.util.di.provider import OrderProvider

__all__ = ["OrderProvider"]
