from summarize_docs_ai.server.app import create_app, serve

__all__ = ["create_app", "serve"]
