import datetime
import logging

import uvicorn
import yaml
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .mod_core.config import load_config, validate_tail_child
from .mod_core.modifier_chain import parse_chain, chain_to_modifier
from .mod_core.snippet import escape_snippet
from .mod_core.widget_parser import parse_widget

# === LOGGING ===
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("transformer_daemon")

# === CONFIGURATION ===
config = load_config()

# === APP INITIALIZATION ===
app = FastAPI(title="Widget Modifier Transformer Daemon", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# === MODELS ===
class ConvertRequest(BaseModel):
    text: str
    escape_snippet: bool = False
    tail_child: str | None = None


class ParseRequest(BaseModel):
    text: str


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(content={"status": "error", "message": message}, status_code=status_code)


# === ROUTES ===
@app.post("/convert")
async def convert_widget(req: ConvertRequest):
    logger.info("[CONVERT] Converting %d characters", len(req.text))

    if not req.text.strip():
        return _error("No widget text to convert", 400)

    tail_child = req.tail_child or config["tail_child"]
    try:
        validate_tail_child(tail_child)
    except ValueError as e:
        return _error(str(e), 400)

    try:
        source = escape_snippet(req.text) if req.escape_snippet else req.text
        chain = parse_chain(source, max_depth=config["max_chain_depth"])
        output = chain_to_modifier(chain, tail_child=tail_child)

        return JSONResponse(content={
            "status": "converted",
            "output": output,
            "modifier_count": len(chain),
            "truncated": chain.truncated,
            "received_length": len(req.text),
            "timestamp": str(datetime.datetime.now())
        })

    except Exception as e:
        logger.exception("Error during widget conversion")
        return _error(str(e), 500)


@app.post("/parse")
async def parse_single_widget(req: ParseRequest):
    logger.info("[PARSE] Parsing single call expression")
    return {"widget": parse_widget(req.text).to_dict()}


@app.get("/debug/chain")
async def debug_chain(text: str):
    chain = parse_chain(text, max_depth=config["max_chain_depth"])
    chain_dict = chain.to_dict()
    return {"chain": chain_dict, "yaml": yaml.safe_dump(chain_dict, sort_keys=False)}


@app.get("/")
async def root():
    return {
        "message": "Widget Modifier Transformer Daemon active",
        "config": {
            "tail_child": config["tail_child"],
            "max_chain_depth": config["max_chain_depth"],
        }
    }


def main():
    logger.info("[BOOT] Transformer daemon starting on %s:%s", config["host"], config["port"])
    uvicorn.run(app, host=config["host"], port=config["port"])


if __name__ == "__main__":
    main()
