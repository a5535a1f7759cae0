from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes.theory import router as theory_router

app = FastAPI(title="Music Theory Engine")

# Allow the web UI dev servers to call the API.
# localhost and 127.0.0.1 count as different origins, so list both.
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:5174",
        "http://127.0.0.1:5174",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(theory_router)


@app.get("/health")
def health() -> dict[str, str]:
    """Return a simple liveness check."""
    return {"status": "ok"}
