"""Energy Quiz MCPサーバーのコマンドラインエントリポイント。"""

if __name__ == "__main__":
    import uvicorn
    from starlette.middleware import Middleware

    from energyquiz.config import ServerConfig
    from energyquiz.logging_setup import setup_logging
    from energyquiz.middleware import TokenAuthMiddleware
    from energyquiz.server import create_server

    config = ServerConfig()
    setup_logging(config.log_level)
    mcp = create_server(config)
    app = mcp.http_app(
        transport="streamable-http",
        middleware=[Middleware(TokenAuthMiddleware, url_token=config.url_token)],
    )
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)
