import pytest

from postag import Trellis


class TestTrellis:
    def test_set_transition_sets_both_directions(self):
        trellis = Trellis("start", "end")
        trellis.set_transition("start", "a", -1.0)

        assert dict(trellis.forward_transitions("start")) == {"a": -1.0}
        assert dict(trellis.backward_transitions("a")) == {"start": -1.0}

    def test_overwrite_transition(self):
        trellis = Trellis("start", "end")
        trellis.set_transition("start", "a", -1.0)
        trellis.set_transition("start", "a", -2.0)

        assert trellis.transition_weight("start", "a") == -2.0
        assert trellis.backward_transitions("a")["start"] == -2.0
        assert trellis.num_transitions == 1
        assert trellis.num_states == 3

    def test_missing_transition_is_none(self):
        """
        Test that an illegal transition is reported as None rather than a weight
        of 0.
        """
        trellis = Trellis("start", "end")
        trellis.set_transition("start", "a", 0.0)

        assert trellis.transition_weight("start", "a") == 0.0
        assert trellis.transition_weight("start", "end") is None
        assert trellis.transition_weight("unknown", "a") is None

    def test_negative_infinity_transition_is_present(self):
        trellis = Trellis("start", "end")
        trellis.set_transition("start", "a", -float("inf"))

        assert trellis.transition_weight("start", "a") == -float("inf")

    def test_unknown_state_has_no_transitions(self):
        trellis = Trellis("start", "end")

        assert len(trellis.forward_transitions("unknown")) == 0
        assert len(trellis.backward_transitions("unknown")) == 0
        # Looking up an unknown state does not add it to the trellis.
        assert "unknown" not in trellis

    def test_transitions_are_read_only(self):
        trellis = Trellis("start", "end")
        trellis.set_transition("start", "a", -1.0)

        with pytest.raises(TypeError):
            trellis.forward_transitions("start")["b"] = -1.0

    def test_set_start_and_end(self):
        trellis = Trellis()
        trellis.set_start("start")
        trellis.set_end("end")

        assert trellis.start_state == "start"
        assert trellis.end_state == "end"
        assert "start" in trellis
        assert "end" in trellis
