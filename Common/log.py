"""
Common/log.py

파이프라인 전 구간에서 공유하는 파일/콘솔 로거 모듈입니다.
"""
import logging
import datetime
import shutil
import os
import sys

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


class Log:
    def __init__(self, log_dir="Log", echo=True):
        # 실행 파일 기준 폴더 (절대 경로가 주어지면 그대로 사용)
        if getattr(sys, 'frozen', False):
            program_dir = os.path.dirname(os.path.abspath(sys.executable))
        else:
            program_dir = os.path.dirname(os.path.abspath(__file__))

        self.log_dir = os.path.join(program_dir, log_dir)
        os.makedirs(self.log_dir, exist_ok=True)

        # 'Log_YYYYMMDD.log'
        self.log_file = os.path.join(self.log_dir, f'Log_{self._current_date_str()}.log')
        # 'YYYYMMDD_streetnet.log'
        self.target_path = os.path.join(program_dir, f'{self._current_date_str()}_streetnet.log')
        self.echo = echo

        self._logger = logging.getLogger("streetnet")
        self._logger.setLevel(logging.DEBUG)
        if not any(getattr(h, "baseFilename", None) == self.log_file for h in self._logger.handlers):
            handler = logging.FileHandler(self.log_file, encoding='utf-8')
            handler.setFormatter(logging.Formatter(
                fmt='%(asctime)s - %(levelname)s - %(message)s',
                datefmt='%Y/%m/%d %H:%M',
            ))
            self._logger.addHandler(handler)

    def _current_date_str(self):
        return datetime.datetime.now().strftime("%Y%m%d")

    def log(self, msg, level='DEBUG', create_log=False):
        """지정된 로그 레벨로 메시지를 기록하고, 필요시 로그 파일을 복사합니다."""
        level = level.upper()
        if level not in _LEVELS:
            print(f"알 수 없는 로그 레벨: {level}")
            return

        self._logger.log(_LEVELS[level], msg)

        if self.echo:
            print(f"{level}: {msg}")

        if create_log:
            self._copy_log()

    def _copy_log(self):
        """로그 파일을 실행 폴더로 복사합니다."""
        try:
            shutil.copy(self.log_file, self.target_path)
        except OSError as e:
            print(f"로그 파일 복사 실패: {e}")

    def get_log_paths(self):
        """현재 로그 파일 경로를 반환하는 메서드."""
        return self.log_file
