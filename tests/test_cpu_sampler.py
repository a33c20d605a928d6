from procmon.service.sampler.cpu_sampler import CpuSampler
from procmon.util.cal_utils import cpu_percent
from tests.fakes import DENIED, FakeClock, FakeHandle


def make_sampler(clock: FakeClock, cores: int = 4) -> CpuSampler:
    return CpuSampler(cores, clock=clock, sleep=clock.sleep)


def test_sleeps_exactly_one_interval(clock):
    sampler = make_sampler(clock)
    sampler.measure_cpu(FakeHandle(cpu_readings=[0.0, 0.0]), 2000)
    assert clock.sleeps == [2.0]


def test_one_full_core_is_100_over_core_count(clock):
    handle = FakeHandle(cpu_readings=[10.0, 11.0])
    assert make_sampler(clock, cores=4).measure_cpu(handle, 1000) == 25


def test_all_cores_busy_reads_100(clock):
    handle = FakeHandle(cpu_readings=[0.0, 8.0])
    assert make_sampler(clock, cores=4).measure_cpu(handle, 2000) == 100


def test_result_is_floored():
    # 100 * 333 / (1 * 1000) = 33.3
    assert cpu_percent(333, 1000, 1) == 33
    assert cpu_percent(999, 1000, 1) == 99


def test_idle_process_reads_zero(clock):
    handle = FakeHandle(cpu_readings=[5.0, 5.0])
    assert make_sampler(clock).measure_cpu(handle, 1000) == 0


def test_never_negative(clock):
    handle = FakeHandle(cpu_readings=[5.0, 4.0])
    assert make_sampler(clock).measure_cpu(handle, 1000) == 0


def test_zero_elapsed_time_is_clamped():
    clock = FakeClock(drift=0.0)
    sampler = CpuSampler(2, clock=clock, sleep=lambda seconds: None)
    handle = FakeHandle(cpu_readings=[0.0, 0.001])
    # elapsed clamped to 1 ms: 100 * 1 / (2 * 1) = 50
    assert sampler.measure_cpu(handle, 1000) == 50


def test_clock_going_backwards_does_not_raise():
    clock = FakeClock(drift=-5.0)
    sampler = CpuSampler(1, clock=clock, sleep=clock.sleep)
    handle = FakeHandle(cpu_readings=[0.0, 0.5])
    assert sampler.measure_cpu(handle, 1000) >= 0


def test_elapsed_time_uses_actual_wall_clock(clock):
    slow = FakeClock(drift=1.0)
    sampler = CpuSampler(1, clock=slow, sleep=slow.sleep)
    handle = FakeHandle(cpu_readings=[0.0, 1.0])
    # slept 1 s but 2 s passed
    assert sampler.measure_cpu(handle, 1000) == 50


def test_zero_core_count_is_treated_as_one():
    assert cpu_percent(500, 1000, 0) == 50


def test_unreadable_cpu_time_reads_zero_and_keeps_pacing(clock):
    handle = FakeHandle(cpu_readings=[DENIED, 3.0])
    assert make_sampler(clock).measure_cpu(handle, 1000) == 0
    assert clock.sleeps == [1.0]
