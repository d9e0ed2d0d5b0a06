"""
认证服务
JWT 签发/校验、注册登录、OAuth 用户开通 (唯一入口)
"""
from datetime import datetime, timedelta, timezone
from typing import Dict
from urllib.parse import quote

import httpx
import jwt
from flask import current_app

from inkwell.extensions import db
from inkwell.exceptions import AuthError, BadRequest
from inkwell.models.auth import User, default_avatar
from inkwell.models.base import commit


def normalize_email(email):
    return (email or '').strip().lower()


class AuthService:
    # ==================== Token ====================

    @staticmethod
    def issue_token(user: User) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            'sub': user.id,
            'email': user.email,
            'iat': now,
            'exp': now + timedelta(seconds=current_app.config['JWT_EXPIRES_IN']),
        }
        return jwt.encode(payload, current_app.config['JWT_SECRET'],
                          algorithm=current_app.config['JWT_ALGORITHM'])

    @staticmethod
    def decode_token(token: str) -> Dict:
        try:
            return jwt.decode(token, current_app.config['JWT_SECRET'],
                              algorithms=[current_app.config['JWT_ALGORITHM']])
        except jwt.ExpiredSignatureError:
            raise AuthError('Invalid or expired token')
        except jwt.InvalidTokenError:
            raise AuthError('Invalid or expired token')

    @staticmethod
    def user_from_token(token: str) -> User:
        payload = AuthService.decode_token(token)
        user = db.session.get(User, payload.get('sub'))
        if user is None:
            raise AuthError('Invalid or expired token')
        return user

    # ==================== 账号密码 ====================

    @staticmethod
    def register(name: str, email: str, password: str) -> User:
        email = normalize_email(email)
        if User.query.filter_by(email=email).first():
            raise BadRequest('User already exists')

        user = User(
            name=name,
            email=email,
            password=password,  # Setter 会自动 Hash
            avatar_url=default_avatar(name),
            is_verified=False,
            is_admin=False,
        )
        user.save('Failed to create user')
        current_app.logger.info(f'✅ 新用户注册: {email}')
        return user

    @staticmethod
    def authenticate(email: str, password: str) -> User:
        user = User.query.filter_by(email=normalize_email(email)).first()
        # 邮箱不存在与密码错误返回相同提示
        if user is None or not user.verify_password(password or ''):
            current_app.logger.warning(f'登录失败: {email}')
            raise AuthError('Invalid credentials')
        return user

    @staticmethod
    def verify_email(user: User, code: str):
        if code != current_app.config['EMAIL_VERIFICATION_CODE']:
            raise BadRequest('Invalid verification code')
        user.is_verified = True
        commit('Failed to verify email')

    # ==================== OAuth ====================

    @staticmethod
    def authorize_url(provider='google') -> str:
        redirect_to = f"{current_app.config['FRONTEND_URL']}/auth/callback"
        return (f"{current_app.config['SUPABASE_URL']}/auth/v1/authorize"
                f"?provider={provider}&redirect_to={quote(redirect_to, safe='')}")

    @staticmethod
    def fetch_oauth_identity(access_token: str) -> Dict:
        """
        向身份服务查询 access_token 对应的用户
        返回 {'id', 'email', 'user_metadata': {...}}
        """
        url = f"{current_app.config['SUPABASE_URL']}/auth/v1/user"
        headers = {'Authorization': f'Bearer {access_token}'}
        if current_app.config.get('SUPABASE_ANON_KEY'):
            headers['apikey'] = current_app.config['SUPABASE_ANON_KEY']

        try:
            with httpx.Client(timeout=current_app.config['OAUTH_TIMEOUT']) as client:
                response = client.get(url, headers=headers)
                response.raise_for_status()
                identity = response.json()
        except (httpx.HTTPError, ValueError) as e:
            current_app.logger.error(f'❌ OAuth 身份查询失败: {e}')
            raise AuthError('OAuth verification failed')

        if not isinstance(identity, dict):
            current_app.logger.error(f'❌ OAuth 身份格式异常: {type(identity).__name__}')
            raise AuthError('OAuth verification failed')
        return identity

    @staticmethod
    def provision_oauth_user(identity: Dict, provider='google') -> User:
        """
        首次第三方登录时开通本地账号；已存在的邮箱账号直接关联
        OAuth 用户没有密码，默认视为已验证邮箱
        """
        email = identity.get('email')
        email = normalize_email(email) if isinstance(email, str) else ''
        if not email:
            raise AuthError('OAuth identity has no email')

        meta = identity.get('user_metadata')
        if not isinstance(meta, dict):
            meta = {}
        user = User.query.filter_by(email=email).first()

        if user is None:
            name = meta.get('full_name') or meta.get('name') or email.split('@')[0]
            user = User(
                name=name,
                email=email,
                password_hash=None,
                avatar_url=meta.get('avatar_url') or default_avatar(name),
                is_verified=True,
                is_admin=False,
                oauth_provider=provider,
                oauth_id=identity.get('id'),
            )
            db.session.add(user)
            current_app.logger.info(f'✅ OAuth 新用户开通: {email}')
        elif not user.oauth_provider:
            user.oauth_provider = provider
            user.oauth_id = identity.get('id')
            user.is_verified = True
            current_app.logger.info(f'OAuth 账号已关联: {email}')

        commit('Failed to create user')
        return user
