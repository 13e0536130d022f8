"""
테스트 실행 스크립트

사용법:
    python tests/test/run_tests.py              # 모든 테스트 실행
    python tests/test/run_tests.py --cov        # 커버리지 포함
    python tests/test/run_tests.py --file test_line_route.py  # 특정 파일만
"""

import sys
import subprocess
import argparse
from pathlib import Path


def run_tests(args):
    """테스트 실행"""
    # 프로젝트 루트 디렉토리
    project_root = Path(__file__).parent.parent.parent
    test_dir = "tests/test"

    target = f"{test_dir}/{args.file}" if args.file else test_dir
    cmd = ["pytest", target]

    if args.verbose:
        cmd.append("-v")

    if args.cov:
        cmd.extend(["--cov=subway", "--cov-report=html", "--cov-report=term-missing"])
        print("📊 커버리지를 측정합니다...")

    if args.keyword:
        cmd.extend(["-k", args.keyword])
        print(f"🔍 '{args.keyword}' 키워드로 필터링합니다...")

    print(f"\n실행 명령어: {' '.join(cmd)}\n")
    print("=" * 70)

    result = subprocess.run(cmd, cwd=project_root)

    print("=" * 70)
    if result.returncode == 0:
        print("\n✅ 모든 테스트를 통과했습니다!")
        if args.cov:
            print("\n📊 커버리지 리포트: htmlcov/index.html")
    else:
        print("\n❌ 일부 테스트가 실패했습니다.")
        sys.exit(result.returncode)


def main():
    parser = argparse.ArgumentParser(description="Subway Admin 테스트 실행")

    parser.add_argument("-v", "--verbose", action="store_true", help="상세한 출력")
    parser.add_argument("--cov", action="store_true", help="코드 커버리지 측정")
    parser.add_argument(
        "--file", type=str, help="특정 테스트 파일만 실행 (예: test_line_route.py)"
    )
    parser.add_argument("-k", "--keyword", type=str, help="키워드로 테스트 필터링")

    args = parser.parse_args()

    print("🧪 Subway Admin 테스트 실행")
    print("=" * 70)

    run_tests(args)


if __name__ == "__main__":
    main()
