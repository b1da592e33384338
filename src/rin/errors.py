"""HTTP 错误类型."""

from fastapi import HTTPException


class BadRequest(HTTPException):
    """参数无效."""

    def __init__(self, detail: str = "请求参数无效") -> None:
        super().__init__(status_code=400, detail=detail)


class Unauthenticated(HTTPException):
    """缺少或无效的凭证."""

    def __init__(self, detail: str = "未登录或登录已过期") -> None:
        super().__init__(
            status_code=401,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class Forbidden(HTTPException):
    """已登录但没有权限."""

    def __init__(self, detail: str = "需要管理员权限") -> None:
        super().__init__(status_code=403, detail=detail)


class NotFound(HTTPException):
    """资源不存在."""

    def __init__(self, detail: str = "资源不存在") -> None:
        super().__init__(status_code=404, detail=detail)


class UpstreamFailure(HTTPException):
    """外部服务（AI Provider）调用失败."""

    def __init__(self, detail: str) -> None:
        super().__init__(status_code=502, detail=detail)
