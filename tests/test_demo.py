from elevator_control.demo import format_status, run_demo


def test_demo_serves_every_call():
    system = run_demo(15)
    car0, car1 = system.cars
    assert car0.is_idle() and car0.current_floor == 8
    assert car1.is_idle() and car1.current_floor == 5
    assert system.status().queued_requests == 0


def test_format_status():
    system = run_demo(1)
    text = format_status(system.status())
    assert "tick 1" in text
    assert "Car 0 at floor 0 going UP, door CLOSED, next stops [8]" in text
    assert "Queued requests: 0" in text
