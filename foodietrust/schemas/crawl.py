"""Response bodies for the crawl endpoints."""

from pydantic import BaseModel


class CrawlOk(BaseModel):
    ok: bool = True


class CrawlFailed(BaseModel):
    error: str
