"""Info 站点信息存储模型."""

from sqlmodel import Field, SQLModel


class Info(SQLModel, table=True):
    """站点信息项（AI 摘要配置等）."""

    __tablename__ = "info"  # type: ignore[assignment]

    key: str = Field(primary_key=True, description="键")
    value: str = Field(description="值")
