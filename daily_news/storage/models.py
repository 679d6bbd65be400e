from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

BUCKETS = ("global", "tech", "ai")


class NewsItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    category: str
    headline: str
    timestamp: str
    viral_score: float = Field(alias="viralScore")
    url: str = "#"
    source: str = "Unknown"
    viewers: Optional[str] = None      # ex.: "22.4K", só quando o provedor reporta views
    thumbnail: Optional[str] = None
    description: Optional[str] = None  # só o dataset de fallback preenche


class NewsBundle(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # "global" é palavra reservada em Python
    global_: List[NewsItem] = Field(default_factory=list, alias="global")
    tech: List[NewsItem] = Field(default_factory=list)
    ai: List[NewsItem] = Field(default_factory=list)

    def bucket(self, name: str) -> List[NewsItem]:
        if name not in BUCKETS:
            raise KeyError(name)
        return self.global_ if name == "global" else getattr(self, name)

    def to_json(self) -> Dict[str, List[Dict]]:
        return self.model_dump(by_alias=True, exclude_none=True)
