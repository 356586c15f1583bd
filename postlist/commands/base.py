"""
Base command for encapsulating business operations.

The Command pattern keeps listing logic out of the HTTP handlers: a handler
validates request parameters into an input model, builds a command around a
``PostStore`` and returns whatever ``execute`` produces.

Example:
    ```python
    @router.get("/posts/{post_id}")
    async def get_post(post_id: int, store: PostStoreDep) -> PostResponse:
        command = GetPostCommand(store)
        return await command.execute(GetPostInput(id=post_id))
    ```
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

TInput = TypeVar("TInput")
TOutput = TypeVar("TOutput")


class BaseCommand(ABC, Generic[TInput, TOutput]):
    """
    Base command for business operations.

    Type Parameters:
        TInput: Input data type (usually a Pydantic model).
        TOutput: Output data type.
    """

    @abstractmethod
    async def execute(self, input_data: TInput) -> TOutput:
        """
        Execute the command.

        Args:
            input_data: Input data for the command.

        Returns:
            Result of the command execution.

        Raises:
            AppException: Subclasses for domain errors.
        """
        pass
