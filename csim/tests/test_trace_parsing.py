import pytest
from csim.core.trace import Operation, TraceFormatError, TraceRecord, parse_line, read_trace


def test_parse_data_access_lines():
    assert parse_line(' L 10,1') == TraceRecord(Operation.LOAD, 0x10, 1)
    assert parse_line(' S 7ff0005c8,8') == TraceRecord(Operation.STORE, 0x7ff0005c8, 8)
    assert parse_line(' M 0421c7f0,4') == TraceRecord(Operation.MODIFY, 0x0421c7f0, 4)


def test_instruction_and_blank_lines_are_skipped():
    assert parse_line('I  0400d7d4,8') is None
    assert parse_line('==12345== valgrind banner') is None
    assert parse_line('') is None
    assert parse_line('   ') is None


@pytest.mark.parametrize('line', [
    ' X 10,1',
    ' I 10,1',
    ' L zz,1',
    ' L 10,abc',
    ' L 10',
    ' L 10,-1',
    ' L 1ffffffffffffffff,1',
])
def test_malformed_access_lines_raise(line):
    with pytest.raises(TraceFormatError):
        parse_line(line)


def test_read_trace_yields_only_data_records():
    lines = [
        'I  0400d7d4,8\n',
        ' M 0421c7f0,4\n',
        ' L 04f6b868,8\n',
        'I  0400d7d8,3\n',
        ' S 7ff0005c8,8\r\n',
    ]
    records = list(read_trace(lines))
    assert [r.operation for r in records] == [Operation.MODIFY, Operation.LOAD, Operation.STORE]
    assert records[-1].address == 0x7ff0005c8


def test_read_trace_reports_line_number():
    with pytest.raises(TraceFormatError) as info:
        list(read_trace([' L 0,1\n', 'I  10,2\n', ' Q 20,1\n']))
    assert info.value.line_number == 3
    assert 'line 3' in str(info.value)


def test_record_str_matches_trace_syntax():
    assert str(TraceRecord(Operation.MODIFY, 0x421c7f0, 4)) == 'M 421c7f0,4'
