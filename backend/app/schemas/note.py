"""Note-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from domains.note_hub.core.models import Note as NoteRecord


class Note(BaseModel):
    """Complete note record, used for both requests and responses."""

    model_config = ConfigDict(populate_by_name=True)

    id: StrictInt = Field(..., description="笔记 ID（由创建方分配）")
    title: str = Field("", description="笔记标题，可为空")
    content: str = Field("", description="富文本内容（HTML 片段）")
    updated_at: StrictInt = Field(..., alias="updatedAt", description="最后保存时间（毫秒时间戳）")

    def to_record(self) -> NoteRecord:
        """Convert to the storage dataclass."""
        return NoteRecord(
            id=self.id,
            title=self.title,
            content=self.content,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_record(cls, record: NoteRecord) -> "Note":
        return cls(
            id=record.id,
            title=record.title,
            content=record.content,
            updated_at=record.updated_at,
        )
