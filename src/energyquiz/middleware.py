"""アクセストークン認証ミドルウェア。"""

import hmac

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp


def _extract_token(request: Request) -> str:
    """クエリパラメータ token または Authorization: Bearer ヘッダーからトークンを取り出す。"""
    token = request.query_params.get("token", "")
    if token:
        return token
    scheme, _, credentials = request.headers.get("authorization", "").partition(" ")
    if scheme.lower() == "bearer":
        return credentials.strip()
    return ""


class TokenAuthMiddleware(BaseHTTPMiddleware):
    """アクセストークンを検証するミドルウェア。

    ENERGYQUIZ_URL_TOKEN が設定されている場合、/health 以外のリクエストに
    トークンの一致を要求する。未設定の場合は検証しない。
    """

    SKIP_PATHS = {"/health"}

    def __init__(self, app: ASGIApp, url_token: str = "") -> None:
        super().__init__(app)
        self.url_token = url_token

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if not self.url_token or request.url.path in self.SKIP_PATHS:
            return await call_next(request)

        if not hmac.compare_digest(_extract_token(request).encode(), self.url_token.encode()):
            return JSONResponse(
                {"error": "Unauthorized", "message": "Invalid or missing token"},
                status_code=401,
            )

        return await call_next(request)
