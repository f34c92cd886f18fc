"""Pretty URLs for the static site pages."""
import os

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from awc_api.deps import get_public_dir

router = APIRouter(tags=["Pages"], include_in_schema=False)

PAGE_ALIASES = {
    "/blog": "blog.html",
    "/prayer-wall": "prayer-wall.html",
    "/testimonials": "testimonials.html",
    "/admin": "admin.html",
}


def _page_route(filename: str):
    def serve_page(public_dir: str = Depends(get_public_dir)):
        path = os.path.join(public_dir, filename)
        if not os.path.isfile(path):
            raise StarletteHTTPException(status_code=404)
        return FileResponse(path, media_type="text/html")

    serve_page.__name__ = f"page_{filename.replace('-', '_').removesuffix('.html')}"
    return serve_page


for _path, _filename in PAGE_ALIASES.items():
    router.add_api_route(_path, _page_route(_filename), methods=["GET"])
