"""
main.py

명령행 진입점이며 객체 생성 및 의존성 주입(Composition Root)을 담당합니다.
"""
from __future__ import annotations

import argparse
import signal
import sys
import traceback
from typing import List, Optional

from pydantic import ValidationError

from Common.log import Log
from Function.log_cleanup import clean_old_logs
from Service.config import EXPORT_FORMATS
from Service.container import build_app
from Service.schemas import PipelineRequest

VERSION = "1.2.0"


def _signal_handler(_sig, _frame) -> None:
    """터미널에서 인터럽트 신호 발생 시 즉시 종료합니다. 부분 결과는 저장하지 않습니다."""
    sys.exit(130)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="streetnet",
        description="OSM(XML) 또는 WKT 도로망의 교차점을 복구하고 비연결 파티션을 정리하여 WKT로 저장합니다.",
    )
    parser.add_argument("input", help="입력 파일 경로 (.osm 또는 .wkt)")
    parser.add_argument("-o", "--output", help="출력 WKT 파일 경로 (기본값: <입력>.wkt)")
    parser.add_argument("-a", "--append", action="store_true", help="출력 파일에 이어쓰기")
    parser.add_argument(
        "-t", "--translate", nargs=2, type=int, metavar=("X", "Y"), default=(0, 0),
        help="복구 후 지도를 x=X, y=Y 미터만큼 평행 이동",
    )
    parser.add_argument(
        "-e", "--export", action="append", choices=EXPORT_FORMATS, default=None,
        help="가중 그래프 내보내기 형식 (반복 지정 가능)",
    )
    repair = parser.add_mutually_exclusive_group()
    repair.add_argument("-y", "--repair", dest="repair", action="store_true", default=None,
                        help="확인 없이 교차점 복구 실행")
    repair.add_argument("-n", "--no-repair", dest="repair", action="store_false",
                        help="교차점 복구 생략")
    return parser


def confirm_repair() -> bool:
    """교차점 복구 실행 여부를 한 번 묻습니다. 'y' 이외의 입력은 모두 거부로 처리합니다."""
    print("교차점 누락 랜드마크를 복구하시겠습니까? 시간이 오래 걸리지만 파티션 분리를 크게 줄일 수 있습니다.")
    try:
        answer = input("'y' 또는 'n' 입력: ")
    except EOFError:
        return False
    return answer.strip()[:1] == "y"


def main(argv: Optional[List[str]] = None) -> int:
    signal.signal(signal.SIGINT, _signal_handler)
    signal.signal(signal.SIGTERM, _signal_handler)

    parser = build_parser()
    args = parser.parse_args(argv)

    logger = Log()
    logger.log(f"=== streetnet v{VERSION} 실행 시작 ===", level="INFO")
    clean_old_logs(logger.log_dir, logger)

    try:
        built = build_app(logger)
        config = built.config

        if args.repair is not None:
            repair = args.repair
        elif sys.stdin.isatty():
            repair = confirm_repair()
        else:
            repair = config.repair_crossings

        request = PipelineRequest(
            input_path=args.input,
            output_path=args.output,
            append=args.append,
            translate_x=args.translate[0],
            translate_y=args.translate[1],
            repair_crossings=repair,
            export_formats=args.export if args.export is not None else config.export_formats,
        )
        request.load_request()
    except ValidationError as e:
        logger.log(f"입력 옵션 검증 실패:\n{e}", level="ERROR")
        parser.print_usage()
        return 2

    try:
        result = built.network_service.run_pipeline(request)
    except Exception:
        logger.log(f"파이프라인 실행 중 치명적 오류 발생:\n{traceback.format_exc()}", level="ERROR")
        return 1

    logger.log(f"=== 저장 완료: {result.output_path} ===", level="INFO", create_log=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
