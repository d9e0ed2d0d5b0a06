"""
读者状态服务
收藏 (阅读清单) 与点赞记录，按用户持久化
"""
from typing import List, Tuple

from sqlalchemy.orm import joinedload

from inkwell.extensions import db
from inkwell.exceptions import ResourceNotFound
from inkwell.models import Bookmark, Post, PostLike
from inkwell.models.base import commit
from inkwell.schemas import PostRecord


def _require_post(post_id) -> Post:
    post = db.session.get(Post, post_id) if post_id else None
    if post is None:
        raise ResourceNotFound('Post not found')
    return post


class ReaderService:
    # ==================== 收藏 ====================

    @staticmethod
    def list_bookmarks(user) -> List[PostRecord]:
        """最近收藏的在前"""
        bookmarks = (Bookmark.query
                     .filter_by(user_id=user.id)
                     .options(joinedload(Bookmark.post).joinedload(Post.author),
                              joinedload(Bookmark.post).joinedload(Post.category),
                              joinedload(Bookmark.post).selectinload(Post.tags))
                     .order_by(Bookmark.created_at.desc())
                     .all())
        return [PostRecord.from_model(b.post) for b in bookmarks if b.post is not None]

    @staticmethod
    def add_bookmark(user, post_id) -> bool:
        """幂等；返回是否新建"""
        _require_post(post_id)
        if Bookmark.query.filter_by(user_id=user.id, post_id=post_id).first():
            return False
        Bookmark(user_id=user.id, post_id=post_id).save('Failed to save bookmark')
        return True

    @staticmethod
    def remove_bookmark(user, post_id) -> bool:
        removed = Bookmark.query.filter_by(user_id=user.id, post_id=post_id).delete(synchronize_session=False)
        commit('Failed to remove bookmark')
        return bool(removed)

    @staticmethod
    def clear_bookmarks(user) -> int:
        removed = Bookmark.query.filter_by(user_id=user.id).delete(synchronize_session=False)
        commit('Failed to clear bookmarks')
        return removed

    # ==================== 点赞 ====================

    @staticmethod
    def liked_post_ids(user) -> List[str]:
        rows = (db.session.query(PostLike.post_id)
                .filter(PostLike.user_id == user.id)
                .order_by(PostLike.created_at)
                .all())
        return [post_id for (post_id,) in rows]

    @staticmethod
    def toggle_like(user, post_id) -> Tuple[bool, int]:
        """
        切换点赞状态并同步文章计数 (计数不低于 0)

        Returns:
            (liked, likes): 切换后的状态与文章最新点赞数
        """
        post = _require_post(post_id)
        existing = PostLike.query.filter_by(user_id=user.id, post_id=post_id).first()

        if existing:
            db.session.delete(existing)
            Post.query.filter(Post.id == post_id, Post.likes > 0).update(
                {Post.likes: Post.likes - 1}, synchronize_session=False)
            liked = False
        else:
            db.session.add(PostLike(user_id=user.id, post_id=post_id))
            Post.query.filter(Post.id == post_id).update(
                {Post.likes: Post.likes + 1}, synchronize_session=False)
            liked = True

        commit('Failed to like post')
        db.session.refresh(post)
        return liked, post.likes
