import json
from typing import Mapping, Optional

JACKPOT_CONTAINER_ID = "iplaygames-jackpot-widget"
PROMOTION_CONTAINER_ID = "iplaygames-promotion-widget"
DEFAULT_IFRAME_ALLOW = "fullscreen; autoplay; encrypted-media"


def _script_embed(base_url: str, script: str, init_object: str, container_id: str, token: str, options: Mapping) -> str:
    config = json.dumps({**options, "token": token})
    return (
        f'<div id="{container_id}"></div>\n'
        f'<script src="{base_url.rstrip("/")}/widgets/{script}"></script>\n'
        "<script>\n"
        f"    {init_object}.init({config});\n"
        "</script>"
    )


def jackpot_widget_embed_code(base_url: str, token: str, options: Optional[Mapping] = None) -> str:
    """
    HTML snippet that mounts the jackpot widget; every option is passed to ``init``.
    """
    options = options or {}
    container_id = options.get("container", JACKPOT_CONTAINER_ID)
    return _script_embed(base_url, "jackpot.js", "IPlayGamesJackpotWidget", container_id, token, options)


def promotion_widget_embed_code(base_url: str, token: str, options: Optional[Mapping] = None) -> str:
    options = options or {}
    container_id = options.get("container", PROMOTION_CONTAINER_ID)
    return _script_embed(base_url, "promotions.js", "IPlayGamesPromotionWidget", container_id, token, options)


def multi_session_iframe(swipe_url: str, options: Optional[Mapping] = None) -> str:
    options = options or {}
    width = options.get("width", "100%")
    height = options.get("height", "100%")
    element_id = f' id="{options["id"]}"' if "id" in options else ""
    css_class = f' class="{options["class"]}"' if "class" in options else ""
    allow = options.get("allow", DEFAULT_IFRAME_ALLOW)
    return (
        f"<iframe{element_id}{css_class}\n"
        f'    src="{swipe_url}"\n'
        f'    width="{width}"\n'
        f'    height="{height}"\n'
        '    frameborder="0"\n'
        f'    allow="{allow}"\n'
        "    allowfullscreen>\n"
        "</iframe>"
    )
