from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import Any, ClassVar, Dict, List, Optional, Tuple
from article_console.core.exceptions import MissingFieldsError
from article_console.models.article import StatusEnum


# Article関連のスキーマ
class ArticleBase(BaseModel):
    title: str = ""
    category: str = ""
    content: str = ""
    status: StatusEnum = StatusEnum.draft

    @field_validator('title', 'category', 'content', mode='before')
    @classmethod
    def none_to_empty_str(cls, v):
        if v is None:
            return ""
        return v


class ArticleDraft(ArticleBase):
    """モーダルで編集中の未確定データ"""
    model_config = ConfigDict(validate_assignment=True)

    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ("title", "category", "content")

    @classmethod
    def from_article(cls, article: "Article") -> "ArticleDraft":
        return cls(
            title=article.title,
            category=article.category,
            content=article.content,
            status=article.status
        )

    def missing_fields(self) -> List[str]:
        """未入力の必須項目"""
        return [name for name in self.REQUIRED_FIELDS if not getattr(self, name).strip()]

    def ensure_complete(self) -> None:
        missing = self.missing_fields()
        if missing:
            raise MissingFieldsError(missing)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class Article(ArticleBase):
    model_config = ConfigDict(frozen=True)

    id: str
    created_date: Optional[datetime] = None

    @field_validator('id', mode='before')
    @classmethod
    def id_to_str(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class Paging(BaseModel):
    page: int = Field(1, ge=1)
    size: int = Field(10, ge=1)
    total_item: int = Field(0, ge=0)
    total_page: int = Field(0, ge=0)


# レスポンス用のスキーマ
class ArticleListResponse(BaseModel):
    data: List[Article] = Field(default_factory=list)
    paging: Paging = Field(default_factory=Paging)

    @field_validator('data', 'paging', mode='before')
    @classmethod
    def null_to_default(cls, v, info):
        if v is None:
            return [] if info.field_name == 'data' else Paging()
        return v


class ArticleDetailResponse(BaseModel):
    data: Article
