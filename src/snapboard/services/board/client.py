"""
Miro board client.

Every operation is a single REST call wrapped in a bounded retry that only
fires on rate limiting. Failures surface as typed errors so callers can
decide whether they are fatal (board creation) or tolerable (one item).
"""

import threading
import time
from typing import Any, Callable, Dict, Optional

import requests

from ...shared import (
    AuthError, BackendError, BoardRef, ConnectorStyle, PermissionDeniedError,
    PlannedShape, PlannedStickyNote, PlannedText, RateLimitError, Settings,
    UnavailableError, get_logger
)
from .payloads import (
    board_payload, connector_payload, shape_payload, sticky_note_payload, text_payload
)
from .retry import with_retry

BOARD_DESCRIPTION = "Created from whiteboard photo by snapboard"


class MiroBoardClient:
    """
    Client for the Miro REST API v2.
    
    The access token is read from settings on first use, so a missing token
    is reported as a ``ConfigurationError`` only when a board is created.
    """
    
    def __init__(self,
                 settings: Settings,
                 session: Optional[requests.Session] = None,
                 sleep: Callable[[float], None] = time.sleep):
        self.settings = settings
        self.config = settings.board_config
        self.logger = get_logger(__name__)
        self._session = session
        self._session_lock = threading.Lock()
        self._sleep = sleep
    
    def _get_session(self) -> requests.Session:
        token = self.settings.require_miro_access_token()
        with self._session_lock:
            if self._session is None:
                self._session = requests.Session()
            self._session.headers.update({
                'Authorization': f'Bearer {token}',
                'Content-Type': 'application/json',
                'Accept': 'application/json',
            })
            return self._session
    
    # ========== Board operations ==========
    
    def create_board(self, name: str, description: str = BOARD_DESCRIPTION) -> BoardRef:
        """
        Create a new board.
        
        Args:
            name: Board name
            description: Board description
            
        Returns:
            Remote board id and view link
        """
        payload = board_payload(name, description, self.config['team_id'])
        data = self._post('/boards', payload, description="Board creation")
        
        board = BoardRef(board_id=self._require_id(data, "board"), board_url=data.get('viewLink'))
        self.logger.info(f"Created Miro board: {board.board_id}")
        return board
    
    def create_shape(self, board_id: str, shape: PlannedShape) -> str:
        data = self._post(f'/boards/{board_id}/shapes', shape_payload(shape),
                          description=f"Shape {shape.source_id}")
        return self._require_id(data, "shape")
    
    def create_text(self, board_id: str, text: PlannedText) -> str:
        data = self._post(f'/boards/{board_id}/texts', text_payload(text),
                          description=f"Text {text.source_id}")
        return self._require_id(data, "text")
    
    def create_sticky_note(self, board_id: str, sticky: PlannedStickyNote) -> str:
        data = self._post(f'/boards/{board_id}/sticky_notes', sticky_note_payload(sticky),
                          description=f"Sticky note {sticky.source_id}")
        return self._require_id(data, "sticky note")
    
    def create_connector(self,
                         board_id: str,
                         start_item_id: str,
                         end_item_id: str,
                         label: Optional[str] = None,
                         style: str = ConnectorStyle.ARROW) -> str:
        payload = connector_payload(start_item_id, end_item_id, label, style)
        data = self._post(f'/boards/{board_id}/connectors', payload,
                          description=f"Connector {start_item_id} -> {end_item_id}")
        return self._require_id(data, "connector")
    
    # ========== Transport ==========
    
    def _post(self, path: str, payload: Dict[str, Any], description: str) -> Dict[str, Any]:
        session = self._get_session()
        url = f"{self.config['api_base'].rstrip('/')}{path}"
        
        def send() -> Dict[str, Any]:
            try:
                response = session.post(url, json=payload, timeout=self.config['timeout'])
            except (requests.ConnectionError, requests.Timeout) as e:
                raise UnavailableError(f"Miro API is unreachable: {e}")
            self._raise_for_status(response)
            try:
                return response.json()
            except ValueError:
                raise BackendError(f"Miro API returned a non-JSON response for {path}")
        
        return with_retry(
            send,
            max_attempts=self.config['max_attempts'],
            fallback_delay=self.config['retry_fallback_seconds'],
            max_delay=self.config['retry_max_seconds'],
            sleep=self._sleep,
            description=description,
        )
    
    def _raise_for_status(self, response: requests.Response) -> None:
        status = response.status_code
        if status < 400:
            return
        
        message = self._error_message(response)
        if status == 401:
            raise AuthError(f"Miro rejected the access token: {message}")
        if status == 403:
            raise PermissionDeniedError(f"Miro denied access: {message}")
        if status == 429:
            raise RateLimitError(f"Miro API rate limit exceeded: {message}",
                                 retry_after=self._retry_after(response))
        if status >= 500:
            raise UnavailableError(f"Miro API is temporarily unavailable ({status}): {message}")
        raise BackendError(f"Miro API error ({status}): {message}")
    
    @staticmethod
    def _retry_after(response: requests.Response) -> Optional[float]:
        value = response.headers.get('Retry-After')
        if value is None:
            return None
        try:
            return max(float(value), 0.0)
        except ValueError:
            return None
    
    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text[:200] or response.reason or 'Unknown error'
        if isinstance(body, dict):
            return str(body.get('message') or body.get('code') or body)
        return str(body)
    
    @staticmethod
    def _require_id(data: Dict[str, Any], kind: str) -> str:
        item_id = data.get('id') if isinstance(data, dict) else None
        if not item_id:
            raise BackendError(f"Miro API response for {kind} creation has no id")
        return str(item_id)
    
    def close(self) -> None:
        with self._session_lock:
            if self._session is not None:
                self._session.close()
                self._session = None
