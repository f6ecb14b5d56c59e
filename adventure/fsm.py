from __future__ import annotations

from statemachine import State, StateMachine


class SessionFSM(StateMachine):
    """Lifecycle of one play session.

    - at_room: waiting for input in some room (moves and time checks stay here)
    - finished: the END room was reached; no further events are accepted
    The session object owns the room/path data; the FSM only guards transitions.
    """

    at_room = State("at_room", value="at_room", initial=True)
    finished = State("finished", value="finished", final=True)

    move = at_room.to(at_room)
    check_time = at_room.to(at_room)
    arrive = at_room.to(finished)

    @property
    def is_finished(self) -> bool:
        return self.current_state == self.finished
