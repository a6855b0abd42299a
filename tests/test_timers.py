import pytest

from eontimer.calibration import CalibrationService
from eontimer.models import Console
from eontimer.settings import SettingsStore, TimerSettings
from eontimer.timers import (
    DelayTimer,
    EnhancedEntralinkTimer,
    EntralinkTimer,
    FrameTimer,
    SecondTimer,
)


@pytest.fixture
def calibration():
    return CalibrationService(TimerSettings(SettingsStore()))


@pytest.fixture
def second_timer():
    return SecondTimer()


@pytest.fixture
def delay_timer(second_timer, calibration):
    return DelayTimer(second_timer, calibration)


@pytest.fixture
def entralink_timer(delay_timer):
    return EntralinkTimer(delay_timer)


@pytest.fixture
def enhanced_timer(entralink_timer):
    return EnhancedEntralinkTimer(entralink_timer)


@pytest.fixture
def frame_timer(calibration):
    return FrameTimer(calibration)


@pytest.mark.parametrize("target,cal", [(0, 0), (50, -95), (13, 0), (59, 500), (1, -5000)])
def test_second_stage1_is_at_least_minimum_and_shifted_by_minutes(second_timer, target, cal):
    stage = second_timer.create_stage1(target, cal)
    assert stage >= 14000
    assert (stage - (target * 1000 + cal + 200)) % 60000 == 0
    assert stage - 60000 < 14000 or stage == target * 1000 + cal + 200


def test_second_create_stages_wraps_stage1(second_timer):
    assert second_timer.create_stages(50, -95) == [second_timer.create_stage1(50, -95)]


def test_second_calibrate_values(second_timer):
    assert second_timer.calibrate(50, 50) == 0
    assert second_timer.calibrate(50, 49) == 500
    assert second_timer.calibrate(50, 51) == -500


@pytest.mark.parametrize("a,b", [(50, 45), (10, 30), (0, 59)])
def test_second_calibrate_is_antisymmetric(second_timer, a, b):
    assert second_timer.calibrate(a, b) == -second_timer.calibrate(b, a)


def test_delay_create_stages_combines_stage1_and_stage2(delay_timer):
    assert delay_timer.create_stages(600, 50, -95) == [
        delay_timer.create_stage1(600, 50, -95),
        delay_timer.create_stage2(600, -95),
    ]


@pytest.mark.parametrize("delay,second,cal", [(600, 50, 0), (1200, 50, -95), (3000, 10, 40)])
def test_delay_stages_sum_to_second_stage_modulo_minutes(
    delay_timer, second_timer, delay, second, cal
):
    stage1, stage2 = delay_timer.create_stages(delay, second, cal)
    assert stage1 >= 14000
    assert (stage1 + stage2 + cal - second_timer.create_stage1(second, cal)) % 60000 == 0


def test_delay_stage2_uses_calibration_service(delay_timer, calibration):
    assert delay_timer.create_stage2(600, 10) + 10 == calibration.to_milliseconds(600)


def test_delay_calibrate_exact_hit_is_zero(delay_timer):
    assert delay_timer.calibrate(600, 600) == 0


def test_delay_calibrate_far_hit_is_full_delta(delay_timer, calibration):
    expected = calibration.to_milliseconds(700) - calibration.to_milliseconds(600)
    assert delay_timer.calibrate(600, 700) == expected
    assert delay_timer.calibrate(700, 600) == -expected


def test_delay_calibrate_close_hit_is_damped(delay_timer, calibration):
    delta = calibration.to_milliseconds(605) - calibration.to_milliseconds(600)
    result = delay_timer.calibrate(600, 605)
    assert 0 < result < delta
    assert delay_timer.calibrate(605, 600) < 0


def test_entralink_stages_offset_delay_stages(entralink_timer, delay_timer):
    assert entralink_timer.create_stage1(1200, 50, -95) == delay_timer.create_stage1(1200, 50, -95) + 250
    assert entralink_timer.create_stage2(1200, -95, 256) == delay_timer.create_stage2(1200, -95) - 256
    assert entralink_timer.create_stages(1200, 50, -95, 256) == [
        entralink_timer.create_stage1(1200, 50, -95),
        entralink_timer.create_stage2(1200, -95, 256),
    ]


def test_entralink_calibrate_delegates(entralink_timer, delay_timer):
    assert entralink_timer.calibrate(1200, 1300) == delay_timer.calibrate(1200, 1300)
    assert entralink_timer.calibrate(1200, 1203) == delay_timer.calibrate(1200, 1203)


def test_enhanced_stages(enhanced_timer, entralink_timer):
    stages = enhanced_timer.create_stages(1200, 50, 100, -95, 256, 0)
    assert len(stages) == 3
    assert stages[0] == entralink_timer.create_stage1(1200, 50, -95)
    assert stages[1] == entralink_timer.create_stage2(1200, -95, 256)
    assert stages[2] == enhanced_timer.create_stage3(100, 0)


def test_enhanced_stage3_properties(enhanced_timer):
    assert enhanced_timer.create_stage3(0, 37) == 37
    assert enhanced_timer.create_stage3(100, 0) % 1000 == 0
    assert enhanced_timer.create_stage3(100, 25) - enhanced_timer.create_stage3(100, 0) == 25
    assert enhanced_timer.create_stage3(100, 0) > 100 * 1000


def test_enhanced_calibrate_properties(enhanced_timer):
    assert enhanced_timer.calibrate(100, 100) == 0
    result = enhanced_timer.calibrate(100, 90)
    assert result > 0
    assert result % 1000 == 0
    assert enhanced_timer.calibrate(90, 100) == -result


def test_frame_stages(frame_timer, calibration):
    assert frame_timer.create_stage1(5000) == 5000
    assert frame_timer.create_stage2(0, 42) == 42
    assert frame_timer.create_stage2(1000, 7) == calibration.to_milliseconds(1000) + 7
    assert frame_timer.create_stages(5000, 1000, 7) == [5000, frame_timer.create_stage2(1000, 7)]


def test_frame_calibrate(frame_timer, calibration):
    assert frame_timer.calibrate(1000, 1000) == 0
    assert frame_timer.calibrate(1000, 990) == calibration.to_milliseconds(10)
    assert frame_timer.calibrate(990, 1000) == -frame_timer.calibrate(1000, 990)


def test_frame_timer_depends_on_console():
    settings = TimerSettings(SettingsStore())
    timer = FrameTimer(CalibrationService(settings))
    nds = timer.create_stage2(1000, 0)
    settings.console = Console.GBA
    gba = timer.create_stage2(1000, 0)
    assert gba > nds