from typing import List

from fastapi import APIRouter

from dependencies import CurrentUser, Posts
from models.post import Post, PostRequest, CommentRequest, Like, Comment, Message

router = APIRouter()

# Post ids use the path convertor so ids with an encoded slash reach the
# service and come back as not-found instead of a routing 404.


@router.post("", response_model=Post)
async def create_post(post_data: PostRequest, posts: Posts, current_user: CurrentUser):
    """Create a post as the current user"""
    return posts.create(current_user, post_data.text)


@router.get("", response_model=List[Post])
async def get_posts(posts: Posts, current_user: CurrentUser):
    """Get all posts, newest first"""
    return posts.list(current_user)


@router.put("/like/{post_id:path}", response_model=List[Like])
async def like_post(post_id: str, posts: Posts, current_user: CurrentUser):
    return posts.like(current_user, post_id)


@router.put("/unlike/{post_id:path}", response_model=Message)
async def unlike_post(post_id: str, posts: Posts, current_user: CurrentUser):
    posts.unlike(current_user, post_id)
    return {"msg": "Post Unliked"}


@router.post("/comment/{post_id:path}", response_model=List[Comment])
async def add_comment(post_id: str, comment: CommentRequest, posts: Posts, current_user: CurrentUser):
    """Add a comment to a post, newest first"""
    return posts.add_comment(current_user, post_id, comment.text)


@router.delete("/comment/{post_id}/{comment_id}", response_model=Message)
async def delete_comment(post_id: str, comment_id: str, posts: Posts, current_user: CurrentUser):
    """Delete one of the current user's comments"""
    posts.delete_comment(current_user, post_id, comment_id)
    return {"msg": "Comment Deleted"}


@router.get("/{post_id:path}", response_model=Post)
async def get_post(post_id: str, posts: Posts, current_user: CurrentUser):
    return posts.get(current_user, post_id)


@router.delete("/{post_id:path}", response_model=Message)
async def delete_post(post_id: str, posts: Posts, current_user: CurrentUser):
    """Delete a post owned by the current user"""
    posts.delete(current_user, post_id)
    return {"msg": "Post Removed"}
