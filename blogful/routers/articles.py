from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from blogful.database import get_db
from blogful.dependencies import require_fields, updated_fields, valid_id
from blogful.models import Article, ArticleStyle
from blogful.sanitize import clean_text
from blogful.schemas import ArticleCreate, ArticleUpdate
from blogful.services import article_service

router = APIRouter(prefix="/api/articles", tags=["articles"])


def serialize_article(article: Article) -> dict:
    return {
        "id": article.id,
        "style": article.style,
        "title": clean_text(article.title),
        "content": clean_text(article.content),
        "date_published": article.date_published,
    }


def _check_style(style: str | None) -> None:
    if style and style not in ArticleStyle.values():
        raise HTTPException(status_code=400, detail="Invalid 'style' in request body")


async def article_or_404(article_id: int, db: AsyncSession = Depends(get_db)) -> Article:
    article = await article_service.get_article_by_id(db, article_id) if valid_id(article_id) else None
    if article is None:
        raise HTTPException(status_code=404, detail="Article does not exist")
    return article


@router.get("")
async def list_articles(db: AsyncSession = Depends(get_db)):
    articles = await article_service.get_all_articles(db)
    return [serialize_article(a) for a in articles]


@router.post("", status_code=201)
async def create_article(
    response: Response,
    data: ArticleCreate | None = None,
    db: AsyncSession = Depends(get_db),
):
    data = data or ArticleCreate()
    new_article = {"title": data.title, "content": data.content, "style": data.style}
    require_fields(new_article)
    _check_style(data.style)

    article = await article_service.insert_article(db, new_article)
    response.headers["Location"] = f"{router.prefix}/{article.id}"
    return serialize_article(article)


@router.get("/{article_id}")
async def get_article(article: Article = Depends(article_or_404)):
    return serialize_article(article)


@router.delete("/{article_id}", status_code=204)
async def delete_article(article: Article = Depends(article_or_404), db: AsyncSession = Depends(get_db)):
    await article_service.delete_article_by_id(db, article.id)


@router.patch("/{article_id}", status_code=204)
async def update_article(
    data: ArticleUpdate | None = None,
    article: Article = Depends(article_or_404),
    db: AsyncSession = Depends(get_db),
):
    data = data or ArticleUpdate()
    fields = updated_fields({"title": data.title, "style": data.style, "content": data.content})
    _check_style(fields.get("style"))
    await article_service.update_article_by_id(db, article.id, fields)
