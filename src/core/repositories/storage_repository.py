"""Contract for the disk that holds uploaded image bytes."""

from abc import ABC, abstractmethod


class ImageStorageRepository(ABC):
    """Stores image files and tells where they are served from."""

    @abstractmethod
    def store_file(
        self,
        *,
        user_id: str,
        file_name: str,
        file_data: bytes,
        mime_type: str,
    ) -> str:
        """Write `file_data` under the owner's folder.

        Args:
            user_id: Owner of the image
            file_name: Generated name, extension included
            file_data: Image bytes
            mime_type: Content type to store the object with

        Returns:
            The storage key

        Raises:
            ImageUploadFailedError: If the write fails
        """

    @abstractmethod
    def public_url(self, *, key: str) -> str:
        """Public URL for a stored key."""

    @abstractmethod
    def remove_file(self, *, key: str) -> None:
        """Delete a stored file.

        Raises:
            ImageDeletionFailedError: If the delete fails
        """
