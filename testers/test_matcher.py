"""
Tests for the match engine.
"""
import datetime

from report_checker.insurers import Insurer
from report_checker.matcher import available_insurers, evaluate, evaluate_walk, missing_insurers
from report_checker.models import Client, ErrorReport, ParsedFileName, WalkResult


def pf(ico, year, month, insurer=Insurer.VZP, invalid=False):
    return ParsedFileName(ico=ico, report_date=datetime.date(year, month, 1),
                          insurer=insurer, file_path=f"/r/{insurer}/{ico}_{year}_{month:02d}.pdf",
                          invalid_directory=invalid, parent_dir_name=str(insurer))


def client(ico, *insurers, name=None):
    return Client(name=name or f"Client {ico}", ico=ico, required_insurers=frozenset(insurers))


def test_filters_by_year_and_month():
    clients = [client("00000001"), client("00000002"), client("00000003")]
    files = [pf("00000001", 2025, 11), pf("00000002", 2025, 11, Insurer.OZP),
             pf("00000003", 2025, 10), pf("00000003", 2024, 11)]
    updated = evaluate(clients, files, 2025, 11)
    assert [c.ico for c in updated] == ["00000001", "00000002", "00000003"]
    assert [c.report_generated for c in updated] == [True, True, False]


def test_no_reports_marks_all_false():
    updated = evaluate([client("00000001"), client("00000002", Insurer.VZP)], [], 2025, 11)
    assert [c.report_generated for c in updated] == [False, False]


def test_required_insurers_superset():
    files = [pf("11111111", 2025, 11, Insurer.VZP), pf("11111111", 2025, 11, Insurer.OZP),
             pf("22222222", 2025, 11, Insurer.VZP)]
    clients = [client("11111111", Insurer.VZP, Insurer.OZP),
               client("22222222", Insurer.VZP, Insurer.OZP)]
    updated = evaluate(clients, files, 2025, 11)
    assert updated[0].report_generated is True
    assert updated[1].report_generated is False


def test_empty_requirement_accepts_any_insurer():
    updated = evaluate([client("11111111")], [pf("11111111", 2025, 11, Insurer.ZPMV)], 2025, 11)
    assert updated[0].report_generated is True


def test_none_requirement_accepts_any_insurer():
    c = Client(name="A", ico="12345678", required_insurers=None)
    files = [pf("12345678", 2025, 11, Insurer.VZP)]
    updated = evaluate([c], files, 2025, 11)
    assert updated[0].report_generated is True
    assert evaluate([c], [], 2025, 11)[0].report_generated is False
    assert missing_insurers(c, available_insurers(files, 2025, 11)) == frozenset()


def test_trims_ico_on_both_sides():
    files = [pf(" 12345678 ", 2025, 11)]
    updated = evaluate([client("12345678 "), client("\t12345678")], files, 2025, 11)
    assert all(c.report_generated for c in updated)


def test_ignores_invalid_directories():
    files = [pf("12345678", 2025, 11, Insurer.VZP, invalid=True)]
    updated = evaluate([client("12345678")], files, 2025, 11)
    assert updated[0].report_generated is False


def test_blank_or_missing_ico_never_matches():
    files = [pf("12345678", 2025, 11)]
    clients = [Client(name="A", ico=None), Client(name="B", ico="  "), client("12345678")]
    updated = evaluate(clients, files, 2025, 11)
    assert [c.report_generated for c in updated] == [False, False, True]


def test_inputs_are_not_mutated():
    original = Client(name="A", ico="12345678", report_generated=True)
    clients = [original]
    updated = evaluate(clients, [], 2025, 11)
    assert clients[0] is original
    assert original.report_generated is True
    assert updated[0].report_generated is False
    assert updated[0] is not original
    assert updated[0].name == "A"


def test_available_and_missing_insurers():
    files = [pf("11111111", 2025, 11, Insurer.VZP), pf("11111111", 2025, 11, Insurer.VZP),
             pf("11111111", 2025, 11, Insurer.OZP, invalid=True)]
    available = available_insurers(files, 2025, 11)
    assert available == {"11111111": frozenset({Insurer.VZP})}

    c = client("11111111", Insurer.VZP, Insurer.OZP)
    assert missing_insurers(c, available) == frozenset({Insurer.OZP})
    assert missing_insurers(client("11111111"), available) == frozenset()
    assert missing_insurers(client("99999999", Insurer.RBP), available) == frozenset({Insurer.RBP})


def test_evaluate_walk_ignores_error_reports():
    result = WalkResult((pf("12345678", 2025, 11),),
                        (ErrorReport("broken.pdf", "ICO not found in file name broken.pdf"),))
    updated = evaluate_walk([client("12345678")], result, 2025, 11)
    assert updated[0].report_generated is True


if __name__ == "__main__":
    test_filters_by_year_and_month()
    test_no_reports_marks_all_false()
    test_required_insurers_superset()
    test_empty_requirement_accepts_any_insurer()
    test_none_requirement_accepts_any_insurer()
    test_trims_ico_on_both_sides()
    test_ignores_invalid_directories()
    test_blank_or_missing_ico_never_matches()
    test_inputs_are_not_mutated()
    test_available_and_missing_insurers()
    test_evaluate_walk_ignores_error_reports()
    print("ALL TESTS PASSED!")
