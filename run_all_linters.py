#!/usr/bin/env python3
"""一次執行所有檢查：格式、匯入排序、靜態分析與單元測試。

步驟：Black、isort、Ruff、Pylint，最後是 pytest。
任何一步失敗時會在總結中列出輸出。
"""

from pathlib import Path
import subprocess
import sys

PACKAGES = ["app", "core", "infrastructure", "server"]
ROOT = Path(__file__).parent


def run_step(cmd: list[str], label: str) -> tuple[bool, str]:
    """執行單一步驟，回傳 (是否成功, 合併輸出)。"""
    print(f"\n{'=' * 60}\n{label}: {' '.join(cmd)}\n{'=' * 60}")
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, check=False, cwd=ROOT)
    except OSError as e:
        print(f"❌ 無法執行: {e}")
        return False, str(e)

    output = proc.stdout + proc.stderr
    print("✅ 成功" if proc.returncode == 0 else "❌ 失敗")
    if output.strip():
        print(output)
    return proc.returncode == 0, output


def main() -> None:
    py = sys.executable
    steps = [
        ([py, "-m", "black", ".", "--check"], "Black"),
        ([py, "-m", "isort", ".", "--check-only"], "isort"),
        ([py, "-m", "ruff", "check", "."], "Ruff"),
        ([py, "-m", "pylint", *PACKAGES], "Pylint"),
        ([py, "-m", "pytest", "-q"], "pytest"),
    ]

    results = [(label, *run_step(cmd, label)) for cmd, label in steps]

    print(f"\n{'=' * 60}\n總結\n{'=' * 60}")
    for label, ok, _ in results:
        print(f"{label}: {'✅ 通過' if ok else '❌ 失敗'}")

    failed = [(label, out) for label, ok, out in results if not ok]
    for label, out in failed:
        if out.strip():
            print(f"\n--- {label} ---\n{out}")
    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
