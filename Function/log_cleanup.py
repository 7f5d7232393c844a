"""
Function/log_cleanup.py

보관 기간이 지난 파이프라인 로그 파일을 정리하는 모듈입니다.
"""
import os
import datetime

RETENTION_DAYS = 7
LOG_PREFIX = "Log_"


def clean_old_logs(log_dir, logger, retention_days=RETENTION_DAYS):
    """
    지정된 디렉토리 내에서 보관 기간이 만료된 로그 파일을 찾아 삭제합니다.

    Args:
        log_dir (str): 로그 파일이 저장된 디렉토리 경로
        logger (Log): 로그 기록을 위한 로거 인스턴스
        retention_days (int): 보관 일수

    Returns:
        int: 삭제된 파일 수
    """
    if not os.path.isdir(log_dir):
        logger.log(f"로그 디렉토리 없음: {log_dir} (정리 생략)", level="WARNING")
        return 0

    now = datetime.datetime.now()
    removed = 0

    for file_name in sorted(os.listdir(log_dir)):
        file_path = os.path.join(log_dir, file_name)

        if not (os.path.isfile(file_path) and file_name.startswith(LOG_PREFIX)):
            continue

        date_part = file_name[len(LOG_PREFIX):len(LOG_PREFIX) + 8]
        try:
            file_date = datetime.datetime.strptime(date_part, "%Y%m%d")
        except ValueError:
            logger.log(f"잘못된 로그 파일 형식 (삭제 스킵): {file_name}", level="WARNING")
            continue

        if (now - file_date).days > retention_days:
            try:
                os.remove(file_path)
            except OSError as e:
                logger.log(f"로그 파일 삭제 실패: {file_name} - {e}", level="WARNING")
                continue
            removed += 1
            logger.log(f"오래된 로그 파일 삭제: {file_name}", level="INFO")

    return removed
