class InkwellError(Exception):
    """Inkwell 系统基础异常类"""
    def __init__(self, message, code=500, payload=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['error'] = self.message
        return rv


class ValidationError(InkwellError):
    """字段级校验错误，返回 {errors: [{field, msg}]}"""
    def __init__(self, errors, message="Validation failed"):
        super().__init__(message, code=400)
        self.errors = errors

    def to_dict(self):
        return {'errors': self.errors}


class BadRequest(InkwellError):
    """业务规则拒绝"""
    def __init__(self, message="Bad request", payload=None):
        super().__init__(message, code=400, payload=payload)


class DependencyError(InkwellError):
    """存在依赖记录，拒绝删除"""
    def __init__(self, message, error_code):
        super().__init__(message, code=400, payload={'code': error_code})


class AuthError(InkwellError):
    """未登录或凭证无效"""
    def __init__(self, message="Invalid credentials", payload=None):
        super().__init__(message, code=401, payload=payload)


class PermissionDenied(InkwellError):
    """权限不足"""
    def __init__(self, message="Admin access required", payload=None):
        super().__init__(message, code=403, payload=payload)


class ResourceNotFound(InkwellError):
    """记录不存在"""
    def __init__(self, message="Not found", payload=None):
        super().__init__(message, code=404, payload=payload)


class StoreError(InkwellError):
    """数据存储失败 (不重试，直接返回 500)"""
    def __init__(self, message="Server error", payload=None):
        super().__init__(message, code=500, payload=payload)
