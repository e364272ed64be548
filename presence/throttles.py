from rest_framework.throttling import SimpleRateThrottle


class PresenceRateThrottle(SimpleRateThrottle):
    """
    Caps heartbeats per user and room.

    Only POST is throttled; leaving a room or going offline is always accepted.
    """
    scope = "presence"

    def allow_request(self, request, view):
        if request.method != "POST":
            return True
        return super().allow_request(request, view)

    def get_cache_key(self, request, view):
        data = request.data if isinstance(request.data, dict) else {}
        user_id = data.get("userId") or getattr(request, "user_id", None)
        if not user_id:
            return None

        room_id = view.kwargs.get("room_id", "global")
        return self.cache_format % {"scope": self.scope, "ident": f"{room_id}:{user_id}"}
