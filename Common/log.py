import logging
import datetime
import os
import sys


class Log:
    LEVELS = {
        "ERROR": logging.ERROR,
        "WARNING": logging.WARNING,
        "INFO": logging.INFO,
        "DEBUG": logging.DEBUG,
    }

    def __init__(self, log_dir="Log", console=True, prefix="Skeleton"):
        # 상대 경로는 프로그램 실행 폴더 기준
        if os.path.isabs(log_dir):
            self.log_dir = log_dir
        else:
            if getattr(sys, 'frozen', False):
                program_dir = os.path.dirname(os.path.abspath(sys.executable))
            else:
                program_dir = os.getcwd()
            self.log_dir = os.path.join(program_dir, log_dir)
        os.makedirs(self.log_dir, exist_ok=True)  # 디렉토리가 없으면 생성

        # 로그 파일 경로 설정 (파일명은 'Skeleton_YYYYMMDD.log' 형식)
        self.log_file = os.path.join(self.log_dir, f'{prefix}_{self._current_date_str()}.log')
        self.console = console

        # 로그 설정 (로그 파일에 기록, 로그 레벨: DEBUG, 날짜 형식 및 메시지 포맷 설정)
        logging.basicConfig(
            filename=self.log_file,
            level=logging.DEBUG,
            format='%(asctime)s - %(levelname)s - %(message)s',
            datefmt='%Y/%m/%d %H:%M',
            encoding='utf-8'
        )

    def _current_date_str(self):
        # 현재 날짜를 'YYYYMMDD' 형식으로 반환하는 메서드
        return datetime.datetime.now().strftime("%Y%m%d")

    def log(self, msg, level='DEBUG'):
        """지정된 로그 레벨로 메시지를 기록하고, 콘솔 출력이 켜져 있으면 함께 출력합니다."""
        level = level.upper()
        levelno = self.LEVELS.get(level)
        if levelno is None:
            print(f"알 수 없는 로그 레벨: {level}")
            return  # 알 수 없는 로그 레벨인 경우 반환

        logging.log(levelno, msg)

        if self.console:
            print(f"{level}: {msg}")  # 콘솔에 로그 출력

    def get_log_paths(self):
        """현재 로그 파일 경로를 반환하는 메서드."""
        return self.log_file
