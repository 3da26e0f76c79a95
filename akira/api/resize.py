from fastapi import APIRouter, Depends, Request
from starlette.datastructures import FormData, UploadFile

from akira.models import ResizeResponse
from akira.services import ResizeService

resize_router = APIRouter()


def get_resize_service(request: Request) -> ResizeService:
    return request.app.state.resize_service


def _text_field(form: FormData, name: str) -> str | None:
    # An empty value still counts as sent; only a missing key is None
    value = form.get(name)
    return value if isinstance(value, str) else None


@resize_router.post("/resize", response_model=ResizeResponse, response_model_exclude_none=True)
async def resize_image(
        request: Request,
        resize_service: ResizeService = Depends(get_resize_service)
):
    form = await request.form()
    image = form.get("image")
    return await resize_service.handle(
        image if isinstance(image, UploadFile) else None,
        _text_field(form, "size"),
        _text_field(form, "quality"),
    )
