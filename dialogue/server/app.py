"""
FastAPI app factory for the stimulus audio server.

Responsibilities:
- Serve pre-recorded .wav clips to the robot, which fetches them by URL
- Health check

Only files that exist directly under the audio directory and end in .wav
are served; everything else is 404.
"""

from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse

from observability.logger import log_event


def create_app(audio_dir: str | Path) -> FastAPI:
    """
    Create the audio server.

    App factory so tests can point it at a temporary directory.
    """
    root = Path(audio_dir).resolve()

    app = FastAPI(title="Stimulus Audio Server")
    app.state.audio_dir = root

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/{filename}")
    async def serve_clip(filename: str) -> FileResponse:
        path = (root / filename).resolve()

        if path.suffix.lower() != ".wav" or path.parent != root or not path.is_file():
            log_event({
                "event_type": "audio_clip_not_found",
                "filename": filename,
            })
            raise HTTPException(status_code=404, detail="Not found")

        log_event({
            "event_type": "audio_clip_served",
            "filename": filename,
        })
        return FileResponse(path, media_type="audio/wav")

    return app
