import uuid
from datetime import datetime

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from inkwell.extensions import db
from inkwell.exceptions import ResourceNotFound, StoreError


def generate_uuid():
    return str(uuid.uuid4())


class BaseModel(db.Model):
    """
    Inkwell 模型基类
    包含：UUID 主键, 创建时间, 更新时间, 保存/删除方法
    """
    __abstract__ = True

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def save(self, error_message='Server error'):
        """保存到数据库"""
        db.session.add(self)
        commit(error_message)
        return self

    @classmethod
    def get_or_raise(cls, ident, message='Not found'):
        """按主键查询，不存在时抛出 404"""
        obj = db.session.get(cls, ident) if ident else None
        if obj is None:
            raise ResourceNotFound(message)
        return obj

    def delete(self, error_message='Server error'):
        """物理删除"""
        db.session.delete(self)
        commit(error_message)


def commit(error_message='Server error'):
    """
    提交当前事务
    失败时回滚并抛出 StoreError，不做重试
    """
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'❌ 数据库写入失败 ({error_message}): {e}')
        raise StoreError(error_message) from e
