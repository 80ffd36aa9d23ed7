# monster_siege/state.py
from typing import Dict, Optional

from .engine.controller import SiegeController

siege_sessions: Dict[str, SiegeController] = {}
sid_to_session: Dict[str, str] = {}


def create_session(sid: str, seed: int) -> SiegeController:
    session_id = f"siege-{sid[:8]}"
    controller = SiegeController(session_id=session_id, seed=seed)
    siege_sessions[session_id] = controller
    sid_to_session[sid] = session_id
    return controller


def get_session(session_id: str) -> Optional[SiegeController]:
    return siege_sessions.get(session_id)


def get_session_by_sid(sid: str) -> Optional[SiegeController]:
    session_id = sid_to_session.get(sid)
    if not session_id:
        return None
    return siege_sessions.get(session_id)


def owner_sids(session_id: str):
    return [sid for sid, owned in sid_to_session.items() if owned == session_id]


def drop_sid(sid: str) -> None:
    sid_to_session.pop(sid, None)


def cleanup_session(session_id: str) -> None:
    controller = siege_sessions.pop(session_id, None)
    if not controller:
        return
    for sid in owner_sids(session_id):
        sid_to_session.pop(sid, None)
