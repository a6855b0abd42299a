import pytest

from eontimer.calibration import CalibrationService
from eontimer.gen5_controller import Gen5TimerController
from eontimer.gen5_model import Gen5TimerModel
from eontimer.models import Gen5TimerMode
from eontimer.settings import SettingsStore, TimerSettings
from eontimer.timers import (
    DelayTimer,
    EnhancedEntralinkTimer,
    EntralinkTimer,
    SecondTimer,
)


def _build(precision=False):
    store = SettingsStore()
    timer_settings = TimerSettings(store)
    timer_settings.precision_calibration_enabled = precision
    calibration = CalibrationService(timer_settings)
    second = SecondTimer()
    delay = DelayTimer(second, calibration)
    entralink = EntralinkTimer(delay)
    enhanced = EnhancedEntralinkTimer(entralink)
    model = Gen5TimerModel(store)
    controller = Gen5TimerController(model, delay, second, entralink, enhanced, calibration)
    return controller, model


@pytest.mark.parametrize(
    "mode, count",
    [
        (Gen5TimerMode.STANDARD, 1),
        (Gen5TimerMode.C_GEAR, 2),
        (Gen5TimerMode.ENTRALINK, 2),
        (Gen5TimerMode.ENTRALINK_PLUS, 3),
    ],
)
def test_stage_count_per_mode(mode, count):
    controller, model = _build()
    model.mode = mode
    assert len(controller.create_stages()) == count


def test_standard_stage_with_precision_calibration():
    controller, model = _build(precision=True)
    assert model.mode is Gen5TimerMode.STANDARD
    assert controller.create_stages() == [
        SecondTimer().create_stage1(model.target_second, model.calibration)
    ]


def test_entralink_stages_relate_to_c_gear_stages():
    controller, model = _build(precision=True)
    model.mode = Gen5TimerMode.C_GEAR
    c_gear = controller.create_stages()
    model.mode = Gen5TimerMode.ENTRALINK
    entralink = controller.create_stages()
    assert entralink[0] == c_gear[0] + 250
    assert entralink[1] == c_gear[1] - model.entralink_calibration


def test_entralink_plus_shares_first_two_stages_with_entralink():
    controller, model = _build()
    model.mode = Gen5TimerMode.ENTRALINK
    entralink = controller.create_stages()
    model.mode = Gen5TimerMode.ENTRALINK_PLUS
    plus = controller.create_stages()
    assert plus[:2] == entralink


def test_timer_changed_emitted_on_field_change():
    controller, model = _build()
    received = []
    controller.timer_changed.connect(received.append)
    model.target_second = 40
    assert received == [controller.create_stages()]


def test_timer_changed_emitted_on_mode_change():
    controller, model = _build()
    received = []
    controller.timer_changed.connect(received.append)
    model.mode = Gen5TimerMode.ENTRALINK_PLUS
    assert len(received) == 1
    assert len(received[0]) == 3


def test_hit_fields_do_not_emit_timer_changed():
    controller, model = _build()
    received = []
    controller.timer_changed.connect(received.append)
    model.delay_hit = 5
    model.second_hit = 3
    model.advances_hit = 7
    assert received == []


def test_standard_calibrate_exact_hit_keeps_calibration_and_clears_hits():
    controller, model = _build()
    before = model.calibration
    model.second_hit = model.target_second
    model.delay_hit = 9
    controller.calibrate()
    assert model.calibration == before
    assert (model.delay_hit, model.second_hit, model.advances_hit) == (0, 0, 0)


def test_standard_calibrate_precision_adds_second_adjustment():
    controller, model = _build(precision=True)
    before = model.calibration
    model.second_hit = model.target_second - 2
    controller.calibrate()
    assert model.calibration == before + SecondTimer().calibrate(
        model.target_second, model.target_second - 2
    )
    assert model.second_hit == 0


def test_c_gear_calibrate_exact_hit_keeps_calibration():
    controller, model = _build()
    model.mode = Gen5TimerMode.C_GEAR
    before = model.calibration
    model.delay_hit = model.target_delay
    controller.calibrate()
    assert model.calibration == before
    assert model.delay_hit == 0


def test_entralink_plus_exact_hits_keep_frame_calibration():
    controller, model = _build()
    model.mode = Gen5TimerMode.ENTRALINK_PLUS
    frame_before = model.frame_calibration
    calibration_before = model.calibration
    model.second_hit = model.target_second
    model.delay_hit = model.target_delay
    model.advances_hit = model.target_advances
    controller.calibrate()
    assert model.frame_calibration == frame_before
    assert model.calibration == calibration_before
    assert model.advances_hit == 0


def test_entralink_plus_advances_adjust_frame_calibration():
    controller, model = _build()
    model.mode = Gen5TimerMode.ENTRALINK_PLUS
    frame_before = model.frame_calibration
    model.second_hit = model.target_second
    model.delay_hit = model.target_delay
    model.advances_hit = model.target_advances - 10
    controller.calibrate()
    expected = EnhancedEntralinkTimer(None).calibrate(
        model.target_advances, model.target_advances - 10
    )
    assert model.frame_calibration == frame_before + expected
    assert model.frame_calibration > frame_before


def test_entralink_calibrate_leaves_frame_calibration_alone():
    controller, model = _build()
    model.mode = Gen5TimerMode.ENTRALINK
    frame_before = model.frame_calibration
    model.advances_hit = 3
    model.delay_hit = model.target_delay + 50
    controller.calibrate()
    assert model.frame_calibration == frame_before
    assert model.advances_hit == 0