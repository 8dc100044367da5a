from flask import Flask, request
import json
import os
import logging

from . import storage, tasks
from .audio_processor import validate_audio_url
from .config import Settings, load_settings
from .exceptions import ConfigurationError, FetchError, InputError
from .stt_service import TranscriptionService, WorkersAIService

logging.basicConfig(level=logging.INFO, format="%(message)s")

app = Flask(__name__)

TEXT_HEADERS = {"Content-Type": "text/plain; charset=UTF-8"}


def build_service(settings: Settings) -> TranscriptionService:
    if not settings.account_id:
        raise ConfigurationError("CF_ACCOUNT_ID")
    if not settings.api_token:
        raise ConfigurationError("CF_API_TOKEN")
    return WorkersAIService(
        settings.account_id,
        settings.api_token,
        model=settings.model,
        api_base=settings.api_base,
        timeout=settings.inference_timeout,
    )


@app.route("/", methods=["GET"])
@app.route("/transcribe", methods=["GET"])
def transcribe():
    try:
        raw_url = request.args.get("url")
        logging.info(json.dumps({"event": "request", "url": raw_url}))

        try:
            audio_url = validate_audio_url(raw_url)
        except InputError as e:
            event = "missing_url" if raw_url is None or not raw_url.strip() else "invalid_url"
            logging.info(json.dumps({"event": event, "url": raw_url}))
            return e.reason, 400, TEXT_HEADERS

        settings = load_settings()
        try:
            service = build_service(settings)
        except ConfigurationError as e:
            logging.error(json.dumps({"event": "config_error", "setting": e.setting}))
            return "Inference service is not configured", 500, TEXT_HEADERS

        try:
            transcript = tasks.transcribe_url(
                audio_url,
                service,
                chunk_size=settings.chunk_size,
                task_options=settings.task_options,
                fetch_timeout=settings.fetch_timeout,
            )
        except FetchError as e:
            logging.error(
                json.dumps({"event": "fetch_error", "url": audio_url, "status": e.status})
            )
            return str(e), 502, TEXT_HEADERS

        logging.info(
            json.dumps(
                {"event": "transcript_ready", "url": audio_url, "chars": len(transcript)}
            )
        )

        if settings.output_bucket:
            blob_path = storage.save_transcript(
                transcript, audio_url, settings.output_bucket, settings.output_prefix
            )
            logging.info(
                json.dumps(
                    {
                        "event": "transcript_saved",
                        "bucket": settings.output_bucket,
                        "path": blob_path,
                    }
                )
            )

        return transcript, 200, TEXT_HEADERS

    except Exception as e:
        logging.exception("Error in /transcribe")
        return f"Server error: {str(e)}", 500, TEXT_HEADERS


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    app.run(host="0.0.0.0", port=port)
