from notifications import NotificationQueue


def test_toasts_expire_by_age(clock):
    queue = NotificationQueue(default_duration=3000, clock=clock)
    queue.push("first")
    clock.advance(1000)
    queue.push("second", duration=500)

    clock.advance(400)
    assert [t.message for t in queue.active()] == ["second", "first"]

    clock.advance(200)
    assert [t.message for t in queue.active()] == ["first"]

    clock.advance(1500)
    assert len(queue.active()) == 0


def test_alpha_fades_over_last_window(clock):
    queue = NotificationQueue(default_duration=3000, fade=800, clock=clock)
    toast = queue.push("hello")
    assert queue.alpha(toast, now=0) == 255
    assert queue.alpha(toast, now=2200) == 255
    assert queue.alpha(toast, now=2600) == 127
    assert queue.alpha(toast, now=3000) == 0
