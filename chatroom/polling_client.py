"""
HTTP polling client for the chatroom API.

The server never pushes; clients refresh presence and message state on their own
timers. ChatroomClient wraps the endpoints, and Poller drives one of them on an
interval with bounded retry and a missed-cycle count that the UI can surface as
"stale presence".
"""

import logging
import time
from typing import Callable, Dict, List, Optional

import requests
from django.conf import settings

logger = logging.getLogger(__name__)

HEARTBEAT_INTERVAL = 10
MESSAGE_REFRESH_INTERVAL = 3
CONVERSATION_REFRESH_INTERVAL = 15


class TransientPollError(Exception):
    """A request that may succeed on a later attempt: network failure, timeout, throttling or 5xx."""


class ChatroomClient:
    """Client for the chatroom polling endpoints"""

    def __init__(self, base_url: Optional[str] = None, token: Optional[str] = None,
                 timeout: float = 5, session: Optional[requests.Session] = None):
        if base_url is None:
            base_url = getattr(settings, 'CHATROOM_BASE_URL', 'http://localhost:8000')
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({'Content-Type': 'application/json'})
        if token:
            self.session.headers['Authorization'] = f'Bearer {token}'

    def _request(self, method: str, path: str, **kwargs):
        try:
            response = self.session.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        except (requests.ConnectionError, requests.Timeout) as e:
            raise TransientPollError(f"{method} {path} failed: {e}") from e

        if response.status_code >= 500 or response.status_code == 429:
            raise TransientPollError(f"{method} {path} returned {response.status_code}")
        response.raise_for_status()
        return response.json()

    def heartbeat(self, room_id, user_id) -> Dict:
        return self._request('POST', f'/rooms/{room_id}/presence', json={'userId': user_id})

    def leave_room(self, room_id, user_id) -> Dict:
        return self._request('DELETE', f'/rooms/{room_id}/presence', json={'userId': user_id})

    def global_heartbeat(self, user_id) -> Dict:
        return self._request('POST', '/online-status', json={'userId': user_id})

    def go_offline(self, user_id) -> Dict:
        return self._request('DELETE', '/online-status', json={'userId': user_id})

    def online_participants(self, room_id) -> List[Dict]:
        return self._request('GET', f'/rooms/{room_id}/online-participants')

    def online_users(self, exclude_user_id) -> List[Dict]:
        return self._request('GET', '/online-users', params={'exclude': exclude_user_id})

    def private_conversations(self, user_id) -> List[Dict]:
        return self._request('GET', f'/private-conversations/{user_id}')

    def private_thread(self, user_id, other_user_id) -> List[Dict]:
        return self._request('GET', f'/private-messages/{user_id}/{other_user_id}')

    def mark_as_read(self, sender_id, receiver_id) -> Dict:
        return self._request(
            'PUT', '/private-messages/mark-as-read', json={'senderId': sender_id, 'receiverId': receiver_id}
        )


class Poller:
    """
    Runs ``action`` every ``interval`` seconds.

    Each cycle makes up to ``max_retries + 1`` attempts, sleeping
    ``min(backoff_cap, backoff_base * 2 ** attempt)`` between them. Only
    TransientPollError is retried; anything else propagates to the caller.
    A cycle whose attempts all fail counts as missed, and ``is_stale`` holds
    once ``stale_after`` cycles in a row were missed.
    """

    def __init__(self, action: Callable, interval: float, max_retries: int = 3,
                 backoff_base: float = 0.5, backoff_cap: float = 8.0, stale_after: int = 3,
                 sleep: Callable[[float], None] = time.sleep, name: Optional[str] = None):
        self.action = action
        self.interval = interval
        self.max_retries = max_retries
        self.backoff_base = backoff_base
        self.backoff_cap = backoff_cap
        self.stale_after = stale_after
        self.sleep = sleep
        self.name = name or getattr(action, '__name__', 'poll')
        self.missed_cycles = 0
        self.last_result = None
        self._stopped = False

    @property
    def is_stale(self) -> bool:
        return self.missed_cycles >= self.stale_after

    def backoff(self, attempt: int) -> float:
        return min(self.backoff_cap, self.backoff_base * (2 ** attempt))

    def poll_once(self) -> bool:
        """Run a single cycle. Returns True on success, False when the cycle was missed."""
        for attempt in range(self.max_retries + 1):
            try:
                self.last_result = self.action()
            except TransientPollError as e:
                logger.warning(f"{self.name}: attempt {attempt + 1} failed: {e}")
                if attempt < self.max_retries:
                    self.sleep(self.backoff(attempt))
                continue

            self.missed_cycles = 0
            return True

        self.missed_cycles += 1
        if self.is_stale:
            logger.error(f"{self.name}: {self.missed_cycles} consecutive cycles missed, state is stale")
        return False

    def run(self, cycles: Optional[int] = None):
        """Poll until stop() is called, or for ``cycles`` cycles when given."""
        self._stopped = False
        completed = 0
        while not self._stopped and (cycles is None or completed < cycles):
            self.poll_once()
            completed += 1
            if not self._stopped and (cycles is None or completed < cycles):
                self.sleep(self.interval)

    def stop(self):
        self._stopped = True


def build_pollers(client: ChatroomClient, user_id, room_id, other_user_id=None, **poller_options) -> Dict[str, Poller]:
    """
    The pollers a chat screen runs, each at its default interval.

    ``heartbeat`` keeps the user present in ``room_id``, ``conversations``
    refreshes the conversation list and, when a thread with ``other_user_id``
    is open, ``messages`` refreshes it.
    """
    pollers = {
        'heartbeat': Poller(
            lambda: client.heartbeat(room_id, user_id),
            HEARTBEAT_INTERVAL, name='heartbeat', **poller_options
        ),
        'conversations': Poller(
            lambda: client.private_conversations(user_id),
            CONVERSATION_REFRESH_INTERVAL, name='conversations', **poller_options
        ),
    }
    if other_user_id:
        pollers['messages'] = Poller(
            lambda: client.private_thread(user_id, other_user_id),
            MESSAGE_REFRESH_INTERVAL, name='messages', **poller_options
        )
    return pollers
