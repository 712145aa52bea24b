import threading

from student_api.application.services.otp_registry import OTPRegistry, coerce_code, generate_otp


class SequenceCodes:
    def __init__(self, *codes):
        self.codes = list(codes)

    def __call__(self):
        return self.codes.pop(0)


def test_generate_otp_is_six_digits():
    for _ in range(1000):
        code = generate_otp()
        assert 100000 <= code <= 999999


def test_wrong_code_keeps_pending_entry():
    registry = OTPRegistry(code_generator=SequenceCodes(123456))
    code = registry.issue("+15551234567")
    assert registry.verify("+15551234567", 654321) is False
    assert registry.pending("+15551234567") == code
    assert registry.verify("+15551234567", code) is True


def test_correct_code_is_consumed_once():
    registry = OTPRegistry()
    code = registry.issue("+15551234567")
    assert registry.verify("+15551234567", code) is True
    assert registry.verify("+15551234567", code) is False
    assert len(registry) == 0


def test_reissue_invalidates_previous_code():
    registry = OTPRegistry(code_generator=SequenceCodes(111111, 222222))
    first = registry.issue("+15551234567")
    second = registry.issue("+15551234567")
    assert registry.verify("+15551234567", first) is False
    assert registry.verify("+15551234567", second) is True


def test_unknown_phone_fails_closed():
    registry = OTPRegistry()
    assert registry.verify("+15550000000", 123456) is False


def test_string_and_number_codes_compare_equal():
    registry = OTPRegistry(code_generator=SequenceCodes(123456, 123456))
    registry.issue("+1")
    assert registry.verify("+1", "123456") is True
    registry.issue("+1")
    assert registry.verify("+1", " 123456 ") is True


def test_codes_are_scoped_per_phone():
    registry = OTPRegistry(code_generator=SequenceCodes(111111, 222222))
    registry.issue("+1")
    registry.issue("+2")
    assert registry.verify("+1", 222222) is False
    assert registry.verify("+2", 222222) is True
    assert registry.verify("+1", 111111) is True


def test_pending_codes_do_not_expire():
    # No TTL is enforced: a code stays valid until verified or replaced.
    registry = OTPRegistry(code_generator=SequenceCodes(123456))
    registry.issue("+1")
    assert registry.pending("+1") == 123456


def test_coerce_code():
    assert coerce_code(123456) == 123456
    assert coerce_code(123456.0) == 123456
    assert coerce_code("123456") == 123456
    assert coerce_code(123456.5) is None
    assert coerce_code("12a456") is None
    assert coerce_code("") is None
    assert coerce_code(None) is None
    assert coerce_code(True) is None
    assert coerce_code([123456]) is None


def test_coerce_code_decimal_strings():
    assert coerce_code("123456.0") == 123456
    assert coerce_code("123456.") == 123456
    assert coerce_code("+123456") == 123456
    assert coerce_code("123456.5") is None
    assert coerce_code("123_456") is None
    assert coerce_code("１２３４５６") is None
    assert coerce_code("1e5") is None


def test_verify_accepts_decimal_string_and_rejects_underscored_code():
    registry = OTPRegistry(code_generator=lambda: 123456)
    registry.issue("+1")
    assert registry.verify("+1", "123_456") is False
    assert registry.verify("+1", "123456.0") is True


def test_concurrent_verify_succeeds_only_once():
    registry = OTPRegistry(code_generator=SequenceCodes(123456))
    registry.issue("+1")
    results = []
    barrier = threading.Barrier(8)

    def worker():
        barrier.wait()
        results.append(registry.verify("+1", 123456))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert results.count(True) == 1
