from urllib.parse import urlencode

from flask import current_app, jsonify, redirect, request
from flask_login import current_user, login_required

from inkwell.blueprints.auth import auth_bp
from inkwell.blueprints.auth.forms import RegisterForm, LoginForm, VerifyEmailForm
from inkwell.exceptions import InkwellError
from inkwell.schemas import UserRecord, to_api
from inkwell.services.auth_service import AuthService


def _user_payload(user):
    return to_api(UserRecord.from_model(user))


@auth_bp.route('/register', methods=['POST'])
def register():
    form = RegisterForm().validate_or_raise()
    user = AuthService.register(form.name.data, form.email.data, form.password.data)
    return jsonify({
        'message': 'User created successfully',
        'token': AuthService.issue_token(user),
        'user': _user_payload(user),
    }), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    form = LoginForm().validate_or_raise()
    user = AuthService.authenticate(form.email.data, form.password.data)
    return jsonify({
        'message': 'Login successful',
        'token': AuthService.issue_token(user),
        'user': _user_payload(user),
    })


@auth_bp.route('/verify-email', methods=['POST'])
@login_required
def verify_email():
    form = VerifyEmailForm().validate_or_raise()
    AuthService.verify_email(current_user, form.code.data)
    return jsonify({'message': 'Email verified successfully'})


@auth_bp.route('/google')
def google_login():
    """跳转到身份服务的 Google 授权页"""
    return redirect(AuthService.authorize_url('google'))


@auth_bp.route('/google/callback')
def google_callback():
    """
    身份服务回调：换取用户信息并开通本地账号
    成功跳转前端回调页 (携带 token)，任何失败跳转登录页
    """
    frontend = current_app.config['FRONTEND_URL']
    failure = redirect(f'{frontend}/login?error=oauth_failed')

    access_token = request.args.get('access_token')
    if not access_token:
        return failure

    try:
        identity = AuthService.fetch_oauth_identity(access_token)
        user = AuthService.provision_oauth_user(identity, provider='google')
    except InkwellError as e:
        current_app.logger.warning(f'OAuth 回调失败: {e.message}')
        return failure

    query = urlencode({'token': AuthService.issue_token(user)})
    return redirect(f'{frontend}/auth/callback?{query}')


@auth_bp.route('/me')
@login_required
def me():
    return jsonify({'user': _user_payload(current_user)})
