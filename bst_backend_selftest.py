"""Smoke test against a running backend (``python tools/run_backend.py``)."""

import json

import requests

BASE = "http://127.0.0.1:8000"
OPERATOR = "selftest_operator"
TIMEOUT = 15


def pretty(title, data):
    print("\n" + "=" * 60)
    print(">>> " + title)
    print("-" * 60)
    if isinstance(data, str):
        print(data)
    else:
        print(json.dumps(data, ensure_ascii=False, indent=2))


def post(path, payload=None):
    r = requests.post(f"{BASE}{path}", json=payload or {}, timeout=TIMEOUT)
    if r.status_code not in (200, 409):
        r.raise_for_status()
    return r.json()


def check_health():
    print("\n[1] /health")
    r = requests.get(f"{BASE}/health", timeout=TIMEOUT)
    r.raise_for_status()
    pretty("health", r.json())


def start_session():
    print("\n[2] /game/session")
    data = post("/game/session", {"name": OPERATOR, "viewport_width": 1280})
    pretty("session", data)
    return data


def insert_until_challenge(values):
    print("\n[3] /game/insert until a challenge appears")
    data = None
    for value in values:
        data = post("/game/insert", {"value": str(value)})
        state = data["state"]
        print(f"  insert {value}: mode={state['mode']} nodes={len(state['tree']['nodes'])}")
        if state["mode"] == "awaiting_answer":
            break
    pretty("after inserts", data)
    return data


def answer(direction):
    print(f"\n[4] /game/answer {direction}")
    data = post("/game/answer", {"direction": direction})
    pretty("answer", data)
    return data


def preview(value):
    print(f"\n[5] /tree/path/{value}")
    r = requests.get(f"{BASE}/tree/path/{value}", timeout=TIMEOUT)
    r.raise_for_status()
    pretty("path preview", r.json())


if __name__ == "__main__":
    print("=== BST Quest backend self-check ===")

    check_health()
    start_session()
    challenge = insert_until_challenge([50, 30, 70, 20, 40, 60, 80])

    pending = challenge["state"].get("pending_value")
    root = challenge["state"]["tree"]["nodes"][0]["value"]
    if pending is not None:
        answer("left" if pending < root else "right")

    preview(65)
    pretty("reset", post("/game/reset"))

    print("\n=== Summary ===")
    print("1) Did the 6th insert switch the mode to awaiting_answer?")
    print("2) Did a correct answer add 100 XP and insert the pending value?")
    print("3) Did reset empty the tree but keep the high score?")
