from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse
from pathlib import Path
from typing import Optional

router = APIRouter(tags=["Static"])

INDEX_FILE = "index.html"


def resolve_asset(dist_dir: Path, full_path: str) -> Optional[Path]:
    """
    Returns the file under dist_dir that full_path names, or None when the
    path does not name a regular file inside the bundle.
    """
    if not full_path:
        return None

    try:
        root = dist_dir.resolve()
        candidate = (root / full_path).resolve()
        if not candidate.is_relative_to(root) or not candidate.is_file():
            return None
    except (OSError, ValueError):
        # e.g. an encoded NUL byte in the request path
        return None
    return candidate


# 📦 Serve the SPA bundle, falling back to index.html for client-side routes
@router.api_route("/{full_path:path}", methods=["GET", "HEAD"], include_in_schema=False)
async def serve_spa(full_path: str, request: Request):
    dist_dir: Path = request.app.state.settings.dist_dir

    asset = resolve_asset(dist_dir, full_path)
    if asset is not None:
        return FileResponse(asset)

    index = dist_dir / INDEX_FILE
    if not index.is_file():
        print(f"❌ Entry page not found: {index}")
        raise HTTPException(status_code=404, detail="index.html not found")

    return FileResponse(index, media_type="text/html")
