"""Repository for the admin configuration document.

Firestore admin_config 컬렉션의 단일 문서에 대한 데이터 접근 레이어.
"""

from src.adapters.firestore_client import FirestoreClient
from src.models.admin_config import AdminConfig
from src.repositories.base import BaseRepository

ADMIN_CONFIG_DOC_ID = "main"


class AdminConfigRepository(BaseRepository[AdminConfig]):
    """AdminConfig 문서 Repository.

    Firestore Collection: admin_config
    """

    collection_name = "admin_config"
    model_class = AdminConfig

    def __init__(self, firestore_client: FirestoreClient) -> None:
        """Initialize AdminConfigRepository.

        Args:
            firestore_client: Firestore 클라이언트 인스턴스.
        """
        super().__init__(firestore_client)

    def load(self) -> AdminConfig | None:
        """관리 설정 문서 조회.

        Returns:
            저장된 설정 또는 None (없거나 손상된 경우).
        """
        return self.get_by_id(ADMIN_CONFIG_DOC_ID)

    def save(self, config: AdminConfig) -> None:
        """관리 설정 문서 저장 (전체 교체, last-write-wins).

        Args:
            config: 저장할 설정.
        """
        self.put(ADMIN_CONFIG_DOC_ID, config)
