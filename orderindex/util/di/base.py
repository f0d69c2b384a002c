from dishka import Provider as _DishkaProvider


class Provider(_DishkaProvider):
    """Base for all orderindex DI providers.

    Providers declare the scope of every factory explicitly.
    """
