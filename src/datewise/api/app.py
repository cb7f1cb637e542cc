from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from datewise.api.public import ErrorResponse, router as public_router
from datewise.core.errors import DatewiseInputError

app = FastAPI(title="datewise date facts api")
app.include_router(public_router)


@app.exception_handler(DatewiseInputError)
async def _input_error_handler(request: Request, exc: DatewiseInputError) -> JSONResponse:
    return JSONResponse(status_code=400, content=ErrorResponse(error=str(exc)).model_dump())
