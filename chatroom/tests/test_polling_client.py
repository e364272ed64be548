import json
from unittest.mock import MagicMock

import requests
from django.test import SimpleTestCase

from chatroom.polling_client import (
    CONVERSATION_REFRESH_INTERVAL,
    HEARTBEAT_INTERVAL,
    MESSAGE_REFRESH_INTERVAL,
    ChatroomClient,
    Poller,
    TransientPollError,
    build_pollers,
)


def make_response(status_code, payload=None):
    response = requests.Response()
    response.status_code = status_code
    response.url = 'http://chat.test/'
    response._content = json.dumps(payload if payload is not None else {}).encode()
    return response


class ChatroomClientTest(SimpleTestCase):
    def setUp(self):
        self.session = MagicMock()
        self.session.headers = {}
        self.client = ChatroomClient(base_url='http://chat.test/', token='abc', session=self.session)

    def test_heartbeat_posts_user_id(self):
        self.session.request.return_value = make_response(200, {'message': 'ok', 'last_seen': 'now'})

        result = self.client.heartbeat(7, 'ada')

        self.assertEqual(result['message'], 'ok')
        self.session.request.assert_called_once_with(
            'POST', 'http://chat.test/rooms/7/presence', timeout=5, json={'userId': 'ada'}
        )
        self.assertEqual(self.session.headers['Authorization'], 'Bearer abc')

    def test_online_users_passes_exclude(self):
        self.session.request.return_value = make_response(200, [{'id': 'bob'}])

        self.assertEqual(self.client.online_users('ada'), [{'id': 'bob'}])
        self.session.request.assert_called_once_with(
            'GET', 'http://chat.test/online-users', timeout=5, params={'exclude': 'ada'}
        )

    def test_mark_as_read_uses_put(self):
        self.session.request.return_value = make_response(200, {'marked_read': 2})

        self.assertEqual(self.client.mark_as_read('bob', 'ada')['marked_read'], 2)
        method, url = self.session.request.call_args[0]
        self.assertEqual((method, url), ('PUT', 'http://chat.test/private-messages/mark-as-read'))

    def test_server_error_is_transient(self):
        self.session.request.return_value = make_response(503)

        with self.assertRaises(TransientPollError):
            self.client.private_conversations('ada')

    def test_throttled_is_transient(self):
        self.session.request.return_value = make_response(429)

        with self.assertRaises(TransientPollError):
            self.client.heartbeat(1, 'ada')

    def test_connection_error_is_transient(self):
        self.session.request.side_effect = requests.ConnectionError('refused')

        with self.assertRaises(TransientPollError):
            self.client.online_participants(1)

    def test_client_error_is_not_transient(self):
        self.session.request.return_value = make_response(400, {'userId': ['This field is required.']})

        with self.assertRaises(requests.HTTPError):
            self.client.heartbeat(1, '')


class PollerTest(SimpleTestCase):
    def setUp(self):
        self.sleeps = []

    def make_poller(self, action, **kwargs):
        return Poller(action, interval=HEARTBEAT_INTERVAL, sleep=self.sleeps.append, **kwargs)

    def test_success_resets_missed_cycles(self):
        poller = self.make_poller(MagicMock(return_value='ok'))
        poller.missed_cycles = 2

        self.assertTrue(poller.poll_once())
        self.assertEqual(poller.missed_cycles, 0)
        self.assertEqual(poller.last_result, 'ok')
        self.assertEqual(self.sleeps, [])

    def test_retries_with_exponential_backoff(self):
        action = MagicMock(side_effect=[TransientPollError('down'), TransientPollError('down'), 'ok'])
        poller = self.make_poller(action, backoff_base=1, backoff_cap=30)

        self.assertTrue(poller.poll_once())
        self.assertEqual(action.call_count, 3)
        self.assertEqual(self.sleeps, [1, 2])

    def test_backoff_is_capped(self):
        poller = self.make_poller(MagicMock(), backoff_base=1, backoff_cap=5)

        self.assertEqual([poller.backoff(n) for n in range(5)], [1, 2, 4, 5, 5])

    def test_bounded_retries_then_missed_cycle(self):
        action = MagicMock(side_effect=TransientPollError('down'))
        poller = self.make_poller(action, max_retries=2)

        self.assertFalse(poller.poll_once())
        self.assertEqual(action.call_count, 3)
        self.assertEqual(poller.missed_cycles, 1)
        self.assertFalse(poller.is_stale)

    def test_stale_after_consecutive_misses(self):
        action = MagicMock(side_effect=TransientPollError('down'))
        poller = self.make_poller(action, max_retries=0, stale_after=3)

        for _ in range(3):
            poller.poll_once()

        self.assertTrue(poller.is_stale)

        action.side_effect = None
        action.return_value = 'back'
        poller.poll_once()
        self.assertFalse(poller.is_stale)

    def test_non_transient_errors_propagate(self):
        poller = self.make_poller(MagicMock(side_effect=requests.HTTPError('404')))

        with self.assertRaises(requests.HTTPError):
            poller.poll_once()
        self.assertEqual(poller.missed_cycles, 0)

    def test_run_sleeps_interval_between_cycles(self):
        action = MagicMock(return_value='ok')
        poller = self.make_poller(action)

        poller.run(cycles=3)

        self.assertEqual(action.call_count, 3)
        self.assertEqual(self.sleeps, [HEARTBEAT_INTERVAL, HEARTBEAT_INTERVAL])

    def test_stop_ends_run(self):
        poller = self.make_poller(MagicMock())
        poller.action.side_effect = lambda: poller.stop()

        poller.run()

        self.assertEqual(poller.action.call_count, 1)


class BuildPollersTest(SimpleTestCase):
    def setUp(self):
        self.client = MagicMock(spec=ChatroomClient)

    def test_default_intervals(self):
        pollers = build_pollers(self.client, 'ada', 7, 'bob')

        self.assertEqual(pollers['heartbeat'].interval, HEARTBEAT_INTERVAL)
        self.assertEqual(pollers['messages'].interval, MESSAGE_REFRESH_INTERVAL)
        self.assertEqual(pollers['conversations'].interval, CONVERSATION_REFRESH_INTERVAL)

    def test_each_poller_calls_its_endpoint(self):
        pollers = build_pollers(self.client, 'ada', 7, 'bob')

        for poller in pollers.values():
            self.assertTrue(poller.poll_once())

        self.client.heartbeat.assert_called_once_with(7, 'ada')
        self.client.private_thread.assert_called_once_with('ada', 'bob')
        self.client.private_conversations.assert_called_once_with('ada')

    def test_no_message_poller_without_open_thread(self):
        pollers = build_pollers(self.client, 'ada', 7)

        self.assertEqual(set(pollers), {'heartbeat', 'conversations'})

    def test_options_reach_every_poller(self):
        pollers = build_pollers(self.client, 'ada', 7, 'bob', max_retries=1, stale_after=5)

        for poller in pollers.values():
            self.assertEqual(poller.max_retries, 1)
            self.assertEqual(poller.stale_after, 5)
