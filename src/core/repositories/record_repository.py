"""Abstract contract for image record persistence."""

from abc import ABC, abstractmethod
from typing import Any

Record = dict[str, Any]


class ImageRecordRepository(ABC):
    """Contract for storing and retrieving image records.

    Every read and write is scoped to an owner: a record that belongs to
    another user behaves exactly like a record that does not exist.
    Handlers depend on this interface, not the implementation.
    """

    @abstractmethod
    def create_record(self, *, record: Record) -> None:
        """Persist a new image record.

        Args:
            record: Image record dict with required keys:
                    - image_id: str
                    - user_id: str
                    - title: str

        Raises:
            ValueError: If required keys are missing
            DynamoDBError: If creation fails
        """

    @abstractmethod
    def fetch_record(self, *, image_id: str, user_id: str) -> Record | None:
        """Fetch a single record owned by `user_id`.

        Returns:
            Record dict, or None if it does not exist or has another owner

        Raises:
            DynamoDBError: If fetch fails
        """

    @abstractmethod
    def update_record(self, *, image_id: str, user_id: str, changes: Record) -> Record:
        """Apply `changes` to an owned record and return the updated record.

        Raises:
            NotFoundError: If the record does not exist or has another owner
            DynamoDBError: If update fails
        """

    @abstractmethod
    def remove_record(self, *, image_id: str, user_id: str) -> None:
        """Delete an owned record.

        Raises:
            NotFoundError: If the record does not exist or has another owner
            DynamoDBError: If deletion fails
        """

    @abstractmethod
    def list_user_records(self, *, user_id: str) -> list[Record]:
        """List every record owned by `user_id`, oldest first.

        Raises:
            DynamoDBError: If query fails
        """
