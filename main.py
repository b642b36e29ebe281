import logging
from contextlib import asynccontextmanager

import firebase_admin
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from firebase_admin import credentials
from starlette.middleware.cors import CORSMiddleware

import config
from context import RequestContextMiddleware
from errors import FeedError, ValidationError
from routes.auth import router as auth_router
from routes.posts import router as posts_router
from routes.profile import router as profile_router
from services.firestore import FirestoreDB, FirestorePostRepository, FirestoreUserRepository, \
    FirestoreProfileRepository
from services.memory import InMemoryPostRepository, InMemoryUserRepository, InMemoryProfileRepository

logging.basicConfig(level=config.LOG_LEVEL,
                    format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if config.USE_IN_MEMORY_STORE:
        logger.info("Using in-memory document store")
        app.state.posts = InMemoryPostRepository()
        app.state.users = InMemoryUserRepository()
        app.state.profiles = InMemoryProfileRepository()
    else:
        # Initialize Firebase Admin SDK
        cred = credentials.Certificate(config.FIREBASE_CREDENTIALS)
        firebase_app = firebase_admin.initialize_app(cred)

        firestore = FirestoreDB(firebase_app)
        app.state.posts = FirestorePostRepository(firestore)
        app.state.users = FirestoreUserRepository(firestore)
        app.state.profiles = FirestoreProfileRepository(firestore)

    yield


app = FastAPI(lifespan=lifespan)

# middleware to log every request
app.add_middleware(RequestContextMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(FeedError)
async def feed_error_handler(request: Request, exc: FeedError):
    if isinstance(exc, ValidationError):
        return JSONResponse(status_code=exc.status_code, content={"errors": exc.as_errors()})
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "msg": error["msg"],
            "param": str(error["loc"][-1]) if len(error["loc"]) > 1 else None,
            "location": error["loc"][0],
        }
        for error in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"errors": errors})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Server error"})


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "API Running"


# Include routers
app.include_router(posts_router, prefix="/posts", tags=["posts"])
app.include_router(auth_router, prefix="/auth", tags=["auth"])
app.include_router(profile_router, prefix="/profile", tags=["profile"])


if __name__ == "__main__":
    logger.info("Server starting on port %s", config.PORT)
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
