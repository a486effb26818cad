"""Run one real model call per gateway operation and print the parsed replies.

Requires OPENAI_API_KEY in the environment or backend/.env.

Usage (from repo root):
    python backend/scripts/smoke_model_gateway.py

Usage (from backend/):
    python scripts/smoke_model_gateway.py
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from orientlink.gateway import get_default_model_gateway


def main() -> None:
    gateway = get_default_model_gateway()
    replies = {
        "analyze_message": gateway.analyze_message(
            "Hola, necesito 500 piezas con certificación CE antes de diciembre.",
            "es",
            "zh",
        ),
        "extract_provider_info": gateway.extract_provider_info(
            "https://www.alibaba.com/product-detail/wireless-earbuds_1600000000000.html",
            "Bluetooth earbuds, OEM",
        ),
        "generate_responses": gateway.generate_responses(
            "供应商要求30%定金",
            "Negotiate a 20% deposit",
            "negotiator",
        ),
    }
    print(
        json.dumps(
            {operation: gateway.parse_json(text) for operation, text in replies.items()},
            ensure_ascii=False,
            indent=2,
        )
    )


if __name__ == "__main__":
    main()
