import threading

from django.core.management.base import BaseCommand

from chatroom.jwt_utils import generate_test_token
from chatroom.polling_client import ChatroomClient, build_pollers


class Command(BaseCommand):
    help = "Run the heartbeat, conversation and message pollers for one user against a chatroom server"

    def add_arguments(self, parser):
        parser.add_argument("--user-id", required=True, help="User the pollers act for")
        parser.add_argument("--room-id", type=int, required=True, help="Room to keep the user present in")
        parser.add_argument("--with", dest="other_user_id", default=None, help="Open private thread to refresh")
        parser.add_argument("--base-url", default=None, help="Server URL (defaults to CHATROOM_BASE_URL)")
        parser.add_argument("--token", default=None, help="Bearer token; one is minted with JWT_SECRET when omitted")
        parser.add_argument("--cycles", type=int, default=None, help="Stop each poller after this many cycles")

    def handle(self, *args, **options):
        user_id = options["user_id"]
        room_id = options["room_id"]
        token = options.get("token") or generate_test_token(user_id)

        client = ChatroomClient(base_url=options.get("base_url"), token=token)
        pollers = build_pollers(client, user_id, room_id, options.get("other_user_id"))

        threads = [
            threading.Thread(target=poller.run, kwargs={"cycles": options.get("cycles")}, name=name, daemon=True)
            for name, poller in pollers.items()
        ]
        for thread in threads:
            thread.start()

        try:
            for thread in threads:
                thread.join()
        except KeyboardInterrupt:
            for poller in pollers.values():
                poller.stop()
            client.leave_room(room_id, user_id)

        for name, poller in pollers.items():
            line = f"{name}: missed cycles {poller.missed_cycles}, stale {poller.is_stale}"
            if poller.is_stale:
                self.stdout.write(self.style.WARNING(line))
            else:
                self.stdout.write(self.style.SUCCESS(line))
