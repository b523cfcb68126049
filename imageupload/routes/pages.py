from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from imageupload.models.upload import UploadOutcome
from imageupload.services.form import UPLOAD_ACTION, render_form
from imageupload.services.upload import SingleFileUpload

NO_FILE_MESSAGE = "No file uploaded"
SUCCESS_MESSAGE = "File uploaded successfully: {filename}"


def build_router(single_upload: SingleFileUpload) -> APIRouter:
    router = APIRouter(tags=["pages"])

    @router.get("/", response_class=HTMLResponse)
    async def upload_form(request: Request) -> HTMLResponse:
        return render_form(request)

    @router.post(UPLOAD_ACTION, response_class=HTMLResponse)
    async def image_upload(request: Request, outcome: UploadOutcome = Depends(single_upload)) -> HTMLResponse:
        # Every rejection reason collapses into the same message.
        if outcome.file is None:
            return render_form(request, NO_FILE_MESSAGE)
        return render_form(request, SUCCESS_MESSAGE.format(filename=outcome.file.filename))

    return router
