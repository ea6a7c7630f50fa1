"""
CLI Test Suite
"""

import pytest

from bits.cli import main


def run(capsys, *argv):
    main(["--no-color", *argv])
    return capsys.readouterr().out


def test_sum(capsys):
    assert run(capsys, "sum", "8A004A801A8002F478").strip() == "16"


def test_eval(capsys):
    assert run(capsys, "eval", "9C0141080250320F1802104A08").strip() == "1"
    assert run(capsys, "evaluate", "C200B40A82").strip() == "3"


def test_tree(capsys):
    out = run(capsys, "tree", "38006F45291200")
    assert "v1 LESS_THAN (<) [bits 0:49]" in out
    assert "├─ v6 10 [bits 22:33]" in out
    assert "└─ v2 20 [bits 33:49]" in out


def test_inspect(capsys):
    out = run(capsys, "inspect", "D2FE2F")
    assert "Consumed: 21/24 bits" in out
    assert "not zero" in out


def test_reads_hex_file(tmp_path, capsys):
    path = tmp_path / "16"
    path.write_text("C200B40A82\n")
    assert run(capsys, "eval", str(path)).strip() == "3"


def test_strict_padding_flag_fails(capsys):
    with pytest.raises(SystemExit) as exc:
        run(capsys, "--strict-padding", "sum", "D2FE2F")
    assert exc.value.code == 1
    assert "not zero padding" in capsys.readouterr().out


def test_bad_hex_fails(capsys):
    with pytest.raises(SystemExit) as exc:
        run(capsys, "sum", "XYZ")
    assert exc.value.code == 1
    assert "Bad hex input" in capsys.readouterr().out


def test_truncated_input_fails(capsys):
    with pytest.raises(SystemExit) as exc:
        run(capsys, "eval", "38")
    assert exc.value.code == 1
    assert "Decode error at bit 7" in capsys.readouterr().out


def test_no_command_prints_help(capsys):
    out = run(capsys)
    assert "usage: bits" in out


def deep_sum(levels: int) -> str:
    """Hex text for a literal 1 wrapped in `levels` count-framed Sum packets."""
    bits = "000100" + "00001"
    for _ in range(levels):
        bits = "000000" + "1" + f"{1:011b}" + bits
    bits += "0" * (-len(bits) % 8)
    return int(bits, 2).to_bytes(len(bits) // 8, "big").hex().upper()


def test_long_inline_hex_is_not_treated_as_a_path(capsys):
    text = deep_sum(150)
    assert len(text) > 255
    assert run(capsys, "--max-depth", "200", "eval", text).strip() == "1"


def test_unusable_path_falls_back_to_hex(capsys):
    with pytest.raises(SystemExit) as exc:
        run(capsys, "sum", "Z" * 300)
    assert exc.value.code == 1
    assert "Bad hex input" in capsys.readouterr().out


def test_max_depth_beyond_recursion_limit_fails_cleanly(capsys):
    with pytest.raises(SystemExit) as exc:
        run(capsys, "--max-depth", "1000000", "sum", "D2FE28")
    assert exc.value.code == 1
    assert "recursion limit" in capsys.readouterr().out
