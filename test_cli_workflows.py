from __future__ import annotations

import os
import subprocess
import sys
import tempfile
import unittest
from pathlib import Path


CHECK_HEX = ["31", "32", "33", "34", "35", "36", "37", "38", "39"]  # "123456789"


class CLIIntegrationTests(unittest.TestCase):
    def run_cli(self, args, *, expect: int | None = 0):
        cmd = [sys.executable, "-m", "crsfcrc.cli"] + list(args)
        env = os.environ.copy()
        repo_root = Path(__file__).resolve().parent
        existing = env.get("PYTHONPATH", "")
        env["PYTHONPATH"] = str(repo_root) if not existing else f"{repo_root}{os.pathsep}{existing}"
        proc = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            env=env,
        )
        if expect is not None and proc.returncode != expect:
            raise AssertionError(
                f"CLI exited {proc.returncode}, expected {expect}\nCommand: {' '.join(cmd)}\nSTDOUT:\n{proc.stdout}\nSTDERR:\n{proc.stderr}"
            )
        return proc

    def test_calc_check_string(self):
        proc = self.run_cli(["calc"] + CHECK_HEX)
        self.assertEqual(proc.stdout.strip(), "0xBC")

    def test_calc_accepts_packed_and_prefixed_hex(self):
        self.assertEqual(self.run_cli(["calc", "313233343536373839"]).stdout.strip(), "0xBC")
        self.assertEqual(self.run_cli(["calc", "0xff"]).stdout.strip(), "0xF9")

    def test_calc_empty_buffer(self):
        self.assertEqual(self.run_cli(["calc"]).stdout.strip(), "0x00")

    def test_calc_start_seed(self):
        self.assertEqual(self.run_cli(["calc", "--start", "0x31"] + CHECK_HEX[1:]).stdout.strip(), "0xBC")

    def test_calc_offset_form(self):
        proc = self.run_cli(["calc", "--offset", "2", "aa", "bb"] + CHECK_HEX)
        self.assertEqual(proc.stdout.strip(), "0xBC")
        self.assertEqual(proc.stderr, "")

    def test_calc_offset_warns_about_start(self):
        proc = self.run_cli(["calc", "--offset", "0", "--start", "5"] + CHECK_HEX)
        self.assertEqual(proc.stdout.strip(), "0xBC")
        self.assertIn("Warning: --start is ignored", proc.stderr)

    def test_calc_offset_out_of_range(self):
        proc = self.run_cli(["calc", "--offset", "3", "01", "02"], expect=2)
        self.assertIn("Error: offset 3", proc.stderr)

    def test_calc_from_file(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        path = Path(tmp.name) / "frame.bin"
        path.write_bytes(b"123456789")
        self.assertEqual(self.run_cli(["calc", "--file", str(path)]).stdout.strip(), "0xBC")

    def test_missing_file(self):
        proc = self.run_cli(["calc", "--file", "/nonexistent/frame.bin"], expect=2)
        self.assertTrue(proc.stderr.startswith("Error:"))

    def test_file_and_bytes_conflict(self):
        proc = self.run_cli(["calc", "--file", "frame.bin", "01"], expect=2)
        self.assertIn("either hex bytes or --file", proc.stderr)

    def test_invalid_hex(self):
        proc = self.run_cli(["calc", "zz"], expect=2)
        self.assertIn("invalid hex input", proc.stderr)

    def test_check_ok_and_mismatch(self):
        ok = self.run_cli(["check", "0xBC"] + CHECK_HEX)
        self.assertEqual(ok.stdout.strip(), "OK")
        bad = self.run_cli(["check", "0x00"] + CHECK_HEX, expect=1)
        self.assertEqual(bad.stdout.strip(), "MISMATCH computed=0xBC expected=0x00")

    def test_check_rejects_out_of_range_expected(self):
        self.run_cli(["check", "256", "01"], expect=2)

    def test_table_c(self):
        lines = self.run_cli(["table"]).stdout.strip().splitlines()
        self.assertEqual(lines[0], "static const uint8_t crc_8_dvb_s2_table[256] = {")
        self.assertTrue(lines[1].strip().startswith("0x00, 0xD5, 0x7F, 0xAA,"))
        self.assertEqual(lines[-1], "};")
        self.assertEqual(len(lines), 2 + 256 // 8)

    def test_table_python(self):
        out = self.run_cli(["table", "--format", "python"]).stdout
        self.assertTrue(out.startswith("CRC_8_DVB_S2_TABLE = ("))
        self.assertIn("0xF9,\n)", out)


if __name__ == "__main__":
    unittest.main()
