from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Request, Response

NextFn = Callable[["Request"], Awaitable["Response"]]
Middleware = Callable[["Request", NextFn], Awaitable["Response"]]
