"""
Track: Модель трека каталога

Immutable Pydantic модель. Изменение трека (update/delete) записывает
в слот каталога новый экземпляр с тем же id.
"""

from enum import Enum

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class TrackStatus(str, Enum):
    """Статус слота трека"""

    LIVE = "live"
    DELETED = "deleted"  # Слот освобождён, id повторно не выдаётся


# =============================================================================
# TRACK MODEL
# =============================================================================


class Track(BaseModel):
    """
    Модель трека.

    Пустой трек (Track.empty()): значение удалённого слота и ответ
    get_track для id, который никогда не выделялся. Отсутствие трека
    определяется по полям, а не по исключению.
    """

    id: int = Field(..., ge=0, description="Идентификатор трека (монотонный, не переиспользуется)")
    title: str = Field(..., description="Название")
    artist: str = Field(..., description="Исполнитель")
    price: int = Field(..., ge=0, description="Цена в минимальных единицах")
    status: TrackStatus = Field(TrackStatus.LIVE, description="Статус слота")

    model_config = {"frozen": True}  # Immutable

    @classmethod
    def empty(cls) -> "Track":
        """Пустой трек: все поля обнулены, статус DELETED."""
        return cls(id=0, title="", artist="", price=0, status=TrackStatus.DELETED)

    def is_live(self) -> bool:
        return self.status == TrackStatus.LIVE

    def is_empty(self) -> bool:
        """True если все поля трека нулевые (трек отсутствует или удалён)."""
        return self.id == 0 and self.title == "" and self.artist == "" and self.price == 0
