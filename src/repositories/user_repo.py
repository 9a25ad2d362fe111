"""Repository for registered users.

Firestore users 컬렉션에 대한 데이터 접근 레이어.
가입된 사용자 이름의 유일한 출처입니다.
"""

from src.adapters.firestore_client import FirestoreClient
from src.models.user import UserProfile
from src.repositories.base import BaseRepository


class UserRepository(BaseRepository[UserProfile]):
    """사용자 프로필 Repository.

    Firestore Collection: users (document ID = username)
    """

    collection_name = "users"
    model_class = UserProfile

    def __init__(self, firestore_client: FirestoreClient) -> None:
        """Initialize UserRepository.

        Args:
            firestore_client: Firestore 클라이언트 인스턴스.
        """
        super().__init__(firestore_client)

    def list_usernames(self) -> list[str]:
        """가입된 전체 사용자 이름 조회.

        Returns:
            사용자 이름 목록.
        """
        return self.list_ids()

    def get_profile(self, username: str) -> UserProfile | None:
        """사용자 프로필 조회.

        Args:
            username: 사용자 이름.

        Returns:
            프로필 또는 None.
        """
        return self.get_by_id(username)
