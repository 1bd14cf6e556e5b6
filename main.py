# main.py: reading log: list, add, edit, delete, detail
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Form, Request, Depends, HTTPException, status
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from fastapi.staticfiles import StaticFiles
from sqlalchemy.ext.asyncio import AsyncSession

from config import Settings, settings as default_settings
from crud.book import create_book, get_book, list_books, update_book, delete_book
from database import Database, get_db
from errors import NotFoundError, StoreError, ValidationError
from logging_config import setup_logging
from schemas import SortMode
from services.covers import with_cover
from services.dates import to_date_input

BASE_DIR = Path(__file__).resolve().parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))

logger = logging.getLogger(__name__)


def create_app(settings: Settings = default_settings) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting up reading log...")
        db = Database(settings.DATABASE_URL)
        await db.connect()
        app.state.db = db
        yield
        logger.info("Shutting down reading log...")
        await db.disconnect()

    app = FastAPI(title="Reading Log", lifespan=lifespan)
    app.state.settings = settings
    app.mount("/images", StaticFiles(directory=str(BASE_DIR / "static" / "images")), name="images")

    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError):
        return PlainTextResponse(str(exc), status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError):
        return PlainTextResponse("Book not found.", status_code=status.HTTP_404_NOT_FOUND)

    @app.exception_handler(StoreError)
    async def store_error(request: Request, exc: StoreError):
        logger.error(f"Store failure on {request.method} {request.url.path}: {exc}")
        return PlainTextResponse(
            "Something went wrong. Please try again.",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    @app.get("/health", tags=["System"])
    async def health_check(request: Request):
        try:
            await request.app.state.db.ping()
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail={"status": "degraded", "database": "unhealthy"},
            )
        return {"status": "healthy", "database": "connected"}

    @app.get("/", response_class=HTMLResponse)
    async def home(request: Request, sort: str | None = None, db: AsyncSession = Depends(get_db)):
        mode = SortMode.parse(sort or settings.DEFAULT_SORT)
        books = [with_cover(b) for b in await list_books(db, mode)]
        return templates.TemplateResponse(request, "index.html", {
            "books": books,
            "sort_by": mode.value,
            "sort_modes": [m.value for m in SortMode],
        })

    @app.get("/add", response_class=HTMLResponse)
    async def add_form(request: Request):
        return templates.TemplateResponse(request, "add.html", {})

    @app.post("/add")
    async def add_book(
        title: str = Form(""),
        author: str = Form(""),
        isbn: str = Form(""),
        rating: str = Form(""),
        date_read: str = Form(""),
        notes: str = Form(""),
        db: AsyncSession = Depends(get_db),
    ):
        await create_book(db, {
            "title": title,
            "author": author,
            "isbn": isbn,
            "rating": rating,
            "date_read": date_read,
            "notes": notes,
        })
        return RedirectResponse("/", status_code=303)

    @app.get("/edit/{book_id}", response_class=HTMLResponse)
    async def edit_form(book_id: int, request: Request, db: AsyncSession = Depends(get_db)):
        book = await get_book(db, book_id)
        return templates.TemplateResponse(request, "edit.html", {
            "book": book,
            "date_read": to_date_input(book.date_read),
        })

    @app.post("/edit/{book_id}")
    async def update_book_route(
        book_id: int,
        title: str = Form(""),
        author: str = Form(""),
        isbn: str = Form(""),
        rating: str = Form(""),
        date_read: str = Form(""),
        notes: str = Form(""),
        db: AsyncSession = Depends(get_db),
    ):
        await update_book(db, book_id, {
            "title": title,
            "author": author,
            "isbn": isbn,
            "rating": rating,
            "date_read": date_read,
            "notes": notes,
        })
        return RedirectResponse("/", status_code=303)

    @app.post("/delete/{book_id}")
    async def delete_book_route(book_id: int, db: AsyncSession = Depends(get_db)):
        await delete_book(db, book_id)
        return RedirectResponse("/", status_code=303)

    @app.get("/book/{book_id}", response_class=HTMLResponse)
    async def book_detail(book_id: int, request: Request, db: AsyncSession = Depends(get_db)):
        book = with_cover(await get_book(db, book_id))
        return templates.TemplateResponse(request, "book.html", {"book": book})

    return app


setup_logging()
app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=3000)
