"""
安全工具函数
速率限制、跨域与安全响应头
"""
import threading
from collections import deque
from datetime import datetime, timedelta

from flask import request, abort


class RateLimiter:
    """
    按客户端 IP 计数的滑动窗口速率限制器

    通过 init_app 绑定应用，生命周期与应用实例一致；
    每个实例持有自己的计数存储（生产环境可换 Redis）。
    """

    def __init__(self, max_requests=100, window=900, prefix='/api/'):
        self.max_requests = max_requests
        self.window = window
        self.prefix = prefix
        self.enabled = True
        self._storage = {}
        self._last_sweep = None
        self._lock = threading.Lock()

    def init_app(self, app):
        self.max_requests = app.config.get('RATELIMIT_MAX', self.max_requests)
        self.window = app.config.get('RATELIMIT_WINDOW', self.window)
        self.enabled = app.config.get('RATELIMIT_ENABLED', True)
        self.reset()
        app.before_request(self._check_request)

    def reset(self):
        with self._lock:
            self._storage.clear()
            self._last_sweep = None

    def hit(self, client_id, now=None):
        """
        记录一次请求

        Returns:
            bool: 未超限返回 True
        """
        now = now or datetime.now()
        cutoff = now - timedelta(seconds=self.window)

        with self._lock:
            self._sweep(now, cutoff)
            timestamps = self._storage.setdefault(client_id, deque())
            # 清理过期记录
            while timestamps and timestamps[0] <= cutoff:
                timestamps.popleft()

            if len(timestamps) >= self.max_requests:
                return False

            timestamps.append(now)
            return True

    def _sweep(self, now, cutoff):
        """每个窗口周期清理一次已无有效记录的客户端 (调用方持有锁)"""
        if self._last_sweep is None:
            self._last_sweep = now
            return
        if now - self._last_sweep < timedelta(seconds=self.window):
            return

        idle = [cid for cid, ts in self._storage.items() if not ts or ts[-1] <= cutoff]
        for cid in idle:
            del self._storage[cid]
        self._last_sweep = now

    def _check_request(self):
        if not self.enabled or not request.path.startswith(self.prefix):
            return None
        if not self.hit(request.remote_addr or 'unknown'):
            abort(429, description='Too many requests from this IP, please try again later.')
        return None


def apply_cors(response, allowed_origins):
    """按白名单回写跨域响应头"""
    origin = request.headers.get('Origin')
    if origin and origin in allowed_origins:
        response.headers['Access-Control-Allow-Origin'] = origin
        response.headers['Access-Control-Allow-Credentials'] = 'true'
        response.headers['Access-Control-Allow-Methods'] = 'GET, POST, PUT, DELETE, OPTIONS'
        response.headers['Access-Control-Allow-Headers'] = 'Content-Type, Authorization, X-Requested-With'
        response.headers['Access-Control-Expose-Headers'] = 'Content-Range, X-Total-Count'
        response.headers.add('Vary', 'Origin')
    return response


def apply_security_headers(response):
    """常见安全响应头"""
    response.headers.setdefault('X-Content-Type-Options', 'nosniff')
    response.headers.setdefault('X-Frame-Options', 'SAMEORIGIN')
    response.headers.setdefault('Referrer-Policy', 'no-referrer')
    response.headers.setdefault('Cross-Origin-Resource-Policy', 'same-origin')
    return response
