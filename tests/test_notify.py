"""Tests for notifications."""
from bookdash.notify import Notifier, Notification, ERROR, SUCCESS


class FakeClock:
    def __init__(self):
        self.now = 100.0
    
    def __call__(self):
        return self.now


def test_show_and_expire():
    clock = FakeClock()
    notifier = Notifier(3.0, clock=clock)
    
    assert notifier.current() is None
    notifier.show("Book added successfully!")
    assert notifier.current() == Notification("Book added successfully!", SUCCESS)
    
    clock.now += 3.0
    assert notifier.current() is None


def test_new_notification_restarts_timer():
    clock = FakeClock()
    notifier = Notifier(3.0, clock=clock)
    
    notifier.show("first")
    clock.now += 2.0
    notifier.show("second", ERROR)
    clock.now += 2.0
    
    assert notifier.current() == Notification("second", ERROR)


def test_dismiss():
    notifier = Notifier()
    notifier.show("x")
    notifier.dismiss()
    
    assert notifier.current() is None
