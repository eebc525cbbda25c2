from pydantic import Field
from pydantic_settings import SettingsConfigDict

from persistkit.constants.database import NamingStrategy
from .base import PersistBaseSettings


class NamingSettings(PersistBaseSettings):
    model_config = SettingsConfigDict(env_prefix="NAMING_")

    strategy: NamingStrategy = Field(
        default=NamingStrategy.SNAKE_CASE,
        description=(
            "How logical names map to table/column names when no explicit name is set: "
            "'snake_case' (NewsArticle -> news_article) or 'annotation' (unchanged)"
        )
    )
