"""FastAPI server exposing wardrobe and recommendation endpoints."""

from dataclasses import asdict
from functools import lru_cache

from fastapi import Depends, FastAPI, File, Form, HTTPException, UploadFile

from logic.validation import ClothingItemInput, RecommendationRequest
from models.taxonomy import as_options
from wardrobe_app.app import WardrobeApp
from wardrobe_app.logging_config import configure_logging

configure_logging()

app = FastAPI(title="Wardrobe Coordinator", version="0.1.0")


@lru_cache(maxsize=1)
def get_wardrobe_app() -> WardrobeApp:
    """Build the application once per process; tests override this dependency."""

    return WardrobeApp()


def _raise_for_status(response: dict) -> dict:
    status = response.get("status")
    if status == "ok":
        return response
    if status == "needs_review":
        raise HTTPException(status_code=422, detail=response)
    if status == "invalid_image":
        raise HTTPException(status_code=400, detail=response.get("message"))
    if status == "not_found":
        raise HTTPException(status_code=404, detail=response.get("message"))
    if status in {"empty_wardrobe", "in_progress"}:
        raise HTTPException(status_code=409, detail=response.get("message"))
    raise HTTPException(status_code=502, detail=response.get("message", "request failed"))


@app.get("/healthz")
def healthcheck(wardrobe: WardrobeApp = Depends(get_wardrobe_app)) -> dict:
    """Lightweight readiness probe."""

    return {
        "status": "ok",
        "service": "wardrobe-coordinator",
        "environment": wardrobe.config.environment or "local",
        "model": wardrobe.config.gemini_model,
        "model_enabled": wardrobe.generator is not None,
    }


@app.get("/options")
def list_options() -> dict:
    """Categories, occasions and seasons with their labels, plus suggested colours."""

    return as_options()


@app.get("/users/{user_id}/items")
def list_items(user_id: str, wardrobe: WardrobeApp = Depends(get_wardrobe_app)) -> dict:
    items = wardrobe.list_items(user_id)
    return {"items": [asdict(item) for item in items]}


@app.post("/users/{user_id}/items", status_code=201)
def add_item(
    user_id: str, request: ClothingItemInput, wardrobe: WardrobeApp = Depends(get_wardrobe_app)
) -> dict:
    return _raise_for_status(wardrobe.add_item(user_id=user_id, item_data=request.model_dump()))


@app.post("/users/{user_id}/items/upload", status_code=201)
def upload_item(
    user_id: str,
    name: str = Form(...),
    category: str = Form(...),
    color: str = Form(""),
    description: str = Form(""),
    image: UploadFile = File(...),
    wardrobe: WardrobeApp = Depends(get_wardrobe_app),
) -> dict:
    """Upload the photo and create the item in one request."""

    response = wardrobe.add_item_with_image(
        user_id=user_id,
        item_data={"name": name, "category": category, "color": color, "description": description},
        filename=image.filename or "upload",
        content=image.file.read(),
        content_type=image.content_type,
    )
    return _raise_for_status(response)


@app.delete("/users/{user_id}/items/{item_id}")
def delete_item(user_id: str, item_id: str, wardrobe: WardrobeApp = Depends(get_wardrobe_app)) -> dict:
    return _raise_for_status(wardrobe.delete_item(user_id=user_id, item_id=item_id))


@app.post("/users/{user_id}/recommendations")
def recommend_outfit(
    user_id: str, request: RecommendationRequest, wardrobe: WardrobeApp = Depends(get_wardrobe_app)
) -> dict:
    """Suggest an outfit from the user's wardrobe for the chosen occasion and season."""

    return _raise_for_status(
        wardrobe.recommend_outfit(user_id=user_id, occasion=request.occasion, season=request.season)
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:app", host="0.0.0.0", port=8080, reload=False)
