"""
Error handler decorator for HTTP endpoints.

Converts ``AppException`` instances raised by commands into FastAPI
``HTTPException`` responses, so handlers contain no try/except blocks.
"""

from functools import wraps
from typing import Any, Callable

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError

from postlist.exceptions import AppException
from postlist.logging import logger


def handle_http_errors(func: Callable) -> Callable:
    """
    Decorator for HTTP endpoints to convert AppException to HTTPException.

    Client errors (4xx) are logged as warnings, server errors as errors.

    Example:
        ```python
        @router.get("/posts/{post_id}")
        @handle_http_errors
        async def get_post(post_id: int, store: PostStoreDep) -> PostResponse:
            return await GetPostCommand(store).execute(GetPostInput(id=post_id))
        ```
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except AppException as ex:
            log = logger.error if ex.http_status >= 500 else logger.warning
            log(
                f"{type(ex).__name__} in {func.__name__}: {ex.message}",
                extra={"exception_type": type(ex).__name__},
            )
            raise HTTPException(
                status_code=ex.http_status,
                detail=ex.message,
            ) from ex
        except SQLAlchemyError as ex:
            logger.error(
                f"Database error in {func.__name__}: {ex}",
                exc_info=True,
            )
            raise HTTPException(
                status_code=500,
                detail="Database error occurred",
            ) from ex

    return wrapper
