from csim.data.stats_export import Exporter, Statistics


def test_statistics_counts_and_rates():
    s = Statistics()
    s.record_access(False)
    s.record_access(False, evicted=True)
    s.record_access(True)
    s.record_access(True, evicted=True)  # evicted is ignored on a hit
    assert (s.hits, s.misses, s.evictions) == (2, 2, 1)
    assert s.accesses == 4
    assert s.hit_rate == 0.5
    assert s.summary() == 'hits:2 misses:2 evictions:1'
    s.reset()
    assert s.as_dict()['accesses'] == 0
    assert s.hit_rate == 0.0


def test_export_chart_pdf(tmp_path):
    path = tmp_path / 'hit_rate.pdf'
    assert Exporter.export_chart_pdf(str(path), [0.0, 0.5, 0.66]) == str(path)
    assert path.read_bytes().startswith(b'%PDF')
