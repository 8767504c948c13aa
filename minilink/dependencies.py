from fastapi import Request

from minilink.repository import URLStore


def get_store(request: Request) -> URLStore:
    return request.app.state.store
