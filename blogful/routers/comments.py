from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from blogful.database import get_db
from blogful.dependencies import require_fields, updated_fields, valid_id
from blogful.models import Comment
from blogful.sanitize import clean_text
from blogful.schemas import CommentCreate, CommentUpdate
from blogful.services import comment_service

router = APIRouter(prefix="/api/comments", tags=["comments"])


def serialize_comment(comment: Comment) -> dict:
    return {
        "id": comment.id,
        "text": clean_text(comment.text),
        "date_commented": comment.date_commented,
        "article_id": comment.article_id,
        "user_id": comment.user_id,
    }


async def comment_or_404(comment_id: int, db: AsyncSession = Depends(get_db)) -> Comment:
    comment = await comment_service.get_comment_by_id(db, comment_id) if valid_id(comment_id) else None
    if comment is None:
        raise HTTPException(status_code=404, detail="Comment does not exist")
    return comment


@router.get("")
async def list_comments(db: AsyncSession = Depends(get_db)):
    comments = await comment_service.get_all_comments(db)
    return [serialize_comment(c) for c in comments]


@router.post("", status_code=201)
async def create_comment(
    response: Response,
    data: CommentCreate | None = None,
    db: AsyncSession = Depends(get_db),
):
    data = data or CommentCreate()
    new_comment = {"text": data.text, "article_id": data.article_id, "user_id": data.user_id}
    require_fields(new_comment)
    new_comment["date_commented"] = data.date_commented

    comment = await comment_service.insert_comment(db, new_comment)
    response.headers["Location"] = f"{router.prefix}/{comment.id}"
    return serialize_comment(comment)


@router.get("/{comment_id}")
async def get_comment(comment: Comment = Depends(comment_or_404)):
    return serialize_comment(comment)


@router.delete("/{comment_id}", status_code=204)
async def delete_comment(comment: Comment = Depends(comment_or_404), db: AsyncSession = Depends(get_db)):
    await comment_service.delete_comment_by_id(db, comment.id)


@router.patch("/{comment_id}", status_code=204)
async def update_comment(
    data: CommentUpdate | None = None,
    comment: Comment = Depends(comment_or_404),
    db: AsyncSession = Depends(get_db),
):
    data = data or CommentUpdate()
    fields = updated_fields({"text": data.text, "date_commented": data.date_commented})
    await comment_service.update_comment_by_id(db, comment.id, fields)
