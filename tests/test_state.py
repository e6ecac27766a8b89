import pytest

from postag import START_TAG, STOP_TAG, State, StateInterner


class TestState:
    def test_start(self):
        assert State.start() == State(START_TAG, START_TAG, 0)

    def test_stop(self):
        """
        Test that the stop state accounts for two boundary positions either side of
        the sentence.
        """
        assert State.stop(3) == State(STOP_TAG, STOP_TAG, 5)

    def test_build_equals_constructor(self):
        a = State.build("DT", "NN", 2)
        b = State("DT", "NN", 2)
        assert a == b
        assert hash(a) == hash(b)

    def test_next(self):
        assert State.start().next("DT") == State(START_TAG, "DT", 1)
        assert State("DT", "NN", 2).next("VB") == State("NN", "VB", 3)

    def test_previous(self):
        assert State("NN", "VB", 3).previous("DT") == State("DT", "NN", 2)

    @pytest.mark.parametrize(
        "state,tag",
        [
            (State(START_TAG, START_TAG, 0), "DT"),
            (State("DT", "NN", 2), "VB"),
            (State("NN", STOP_TAG, 5), STOP_TAG),
        ],
    )
    def test_next_previous_round_trip(self, state, tag):
        """
        Test that moving to the next state and back recovers the original state.
        """
        assert state.next(tag).previous(state.previous_previous_tag) == state

    def test_to_tag_list(self):
        path = [
            State.start(),
            State(START_TAG, "DT", 1),
            State("DT", "NN", 2),
            State("NN", STOP_TAG, 3),
            State(STOP_TAG, STOP_TAG, 4),
        ]
        assert State.to_tag_list(path) == [
            START_TAG,
            START_TAG,
            "DT",
            "NN",
            STOP_TAG,
            STOP_TAG,
        ]

    def test_to_tag_list_empty(self):
        assert State.to_tag_list([]) == []


class TestStateInterner:
    def test_canonical_instance(self):
        """
        Test that equal states built different ways are the same object.
        """
        interner = StateInterner()
        a = interner.build("DT", "NN", 2)
        b = interner.next(interner.build(START_TAG, "DT", 1), "NN")
        assert a is b
        assert len(interner) == 2

    def test_previous_is_canonical(self):
        interner = StateInterner()
        a = interner.build("DT", "NN", 2)
        b = interner.previous(interner.build("NN", "VB", 3), "DT")
        assert a is b

    def test_start_and_stop(self):
        interner = StateInterner()
        assert interner.start() is interner.start()
        assert interner.stop(2) is interner.build(STOP_TAG, STOP_TAG, 4)

    def test_clear(self):
        interner = StateInterner()
        interner.start()
        interner.clear()
        assert len(interner) == 0

    def test_separate_interners(self):
        """
        Test that interners do not share state.
        """
        a = StateInterner()
        b = StateInterner()
        a.build("DT", "NN", 2)
        assert len(b) == 0
