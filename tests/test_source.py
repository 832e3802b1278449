import threading
import time

from handcursor.source import DetectionWorker, LatestHands


def wait_for(predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


class FakeDetector:
    def __init__(self, results):
        self.results = list(results)
        self.frames = []
        self._lock = threading.Lock()

    @property
    def calls(self):
        with self._lock:
            return len(self.frames)

    def detect(self, frame):
        with self._lock:
            self.frames.append(frame)
            result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


class TestLatestHands:
    def test_starts_empty(self):
        latest = LatestHands()
        assert latest.read() == ()
        assert latest.version == 0

    def test_publish_overwrites(self, hand_factory):
        latest = LatestHands()
        a, b = hand_factory("Left"), hand_factory("Right")
        latest.publish([a])
        latest.publish([b])
        assert latest.read() == (b,)
        assert latest.version == 2

    def test_snapshot_is_independent_of_source_list(self, hand_factory):
        latest = LatestHands()
        hands = [hand_factory("Left")]
        latest.publish(hands)
        hands.clear()
        assert len(latest.read()) == 1


class TestDetectionWorker:
    def test_publishes_results(self, hand_factory):
        hand = hand_factory("Left")
        worker = DetectionWorker(FakeDetector([[hand]]))
        with worker:
            worker.submit("frame-1")
            assert wait_for(lambda: worker.latest.version == 1)
        assert worker.latest.read() == (hand,)

    def test_unconsumed_frame_is_replaced(self, hand_factory):
        detector = FakeDetector([[hand_factory("Left")]])
        worker = DetectionWorker(detector)
        worker.submit("old")
        worker.submit("new")
        assert worker.dropped_frames == 1
        with worker:
            assert wait_for(lambda: worker.latest.version == 1)
        assert detector.frames == ["new"]

    def test_keeps_last_result_after_failure(self, hand_factory):
        hand = hand_factory("Right")
        detector = FakeDetector([[hand], RuntimeError("boom"), []])
        worker = DetectionWorker(detector)
        with worker:
            worker.submit("f1")
            assert wait_for(lambda: worker.latest.version == 1)
            worker.submit("f2")
            assert wait_for(lambda: detector.calls == 2)
            assert worker.latest.read() == (hand,)
            worker.submit("f3")
            assert wait_for(lambda: worker.latest.version == 2)
        assert worker.latest.read() == ()

    def test_no_restart_while_old_thread_is_busy(self, hand_factory):
        release = threading.Event()
        entered = threading.Event()

        class SlowDetector(FakeDetector):
            def detect(self, frame):
                entered.set()
                release.wait(2.0)
                return super().detect(frame)

        detector = SlowDetector([[hand_factory("Left")], []])
        worker = DetectionWorker(detector)
        worker.start()
        worker.submit("f1")
        assert entered.wait(2.0)

        worker.stop(timeout=0.05)
        assert worker.alive
        before = threading.active_count()
        worker.start()
        assert threading.active_count() == before

        release.set()
        worker.stop()
        assert not worker.alive
        assert detector.calls == 1

    def test_stop_is_idempotent(self):
        worker = DetectionWorker(FakeDetector([]))
        worker.start()
        worker.stop()
        worker.stop()
