"""Blog post endpoints. The public site asks for `?published=true`."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from property_office.core.deps import get_storage, require_admin
from property_office.schemas import (
    BlogPost,
    BlogPostCreate,
    BlogPostUpdate,
    SuccessResponse,
)
from property_office.storage import Storage

router = APIRouter()


@router.get("", response_model=list[BlogPost])
def list_blog_posts(
    published: str | None = Query(None),
    storage: Storage = Depends(get_storage),
):
    # Only the literal "true" filters, matching the public site's query string
    if published == "true":
        return storage.list_published_blog_posts()
    return storage.list_blog_posts()


@router.post(
    "",
    response_model=BlogPost,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_blog_post(data: BlogPostCreate, storage: Storage = Depends(get_storage)):
    return storage.create_blog_post(data)


@router.get("/{post_id}", response_model=BlogPost)
def get_blog_post(post_id: str, storage: Storage = Depends(get_storage)):
    post = storage.get_blog_post(post_id)
    if not post:
        raise HTTPException(status_code=404, detail="Blog post not found")
    return post


@router.put("/{post_id}", response_model=BlogPost, dependencies=[Depends(require_admin)])
def update_blog_post(
    post_id: str,
    data: BlogPostUpdate,
    storage: Storage = Depends(get_storage),
):
    post = storage.update_blog_post(post_id, data)
    if not post:
        raise HTTPException(status_code=404, detail="Blog post not found")
    return post


@router.delete("/{post_id}", response_model=SuccessResponse, dependencies=[Depends(require_admin)])
def delete_blog_post(post_id: str, storage: Storage = Depends(get_storage)):
    if not storage.delete_blog_post(post_id):
        raise HTTPException(status_code=404, detail="Blog post not found")
    return SuccessResponse()
