"""
Bare hello-world app.

Run with: uvicorn api.hello:app --port 8080
"""
from fastapi import APIRouter, FastAPI
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
async def handle_root():
    return "Hello world!"


def create_hello_app() -> FastAPI:
    hello_app = FastAPI(title="Hello World")
    hello_app.include_router(router)
    return hello_app


app = create_hello_app()
