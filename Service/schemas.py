"""
Service/schemas.py

파이프라인 입출력 요청의 구조를 정의하고 입력값의 유효성을 검증하는 스키마 모듈입니다.
"""
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from Service.config import normalize_export_formats

INPUT_SUFFIXES = (".osm", ".wkt")
OUTPUT_SUFFIX = ".wkt"


class FileLoadRequest(BaseModel):
    """
    파일 로드 요청을 위한 데이터 모델입니다.
    """
    file_path: Path = Field(..., description="읽어올 OSM(XML) 또는 WKT 파일의 경로")

    @field_validator("file_path")
    @classmethod
    def validate_extension(cls, v: Path) -> Path:
        if v.suffix.lower() not in INPUT_SUFFIXES:
            raise ValueError(f"지원하지 않는 파일 형식입니다. ({', '.join(INPUT_SUFFIXES)} 필요): {v.suffix}")
        return v

    @field_validator("file_path")
    @classmethod
    def validate_existence(cls, v: Path) -> Path:
        resolved_path = v.resolve()
        if not resolved_path.exists() or not resolved_path.is_file():
            raise ValueError(f"파일을 찾을 수 없습니다: {resolved_path}")
        return resolved_path

    @property
    def source_format(self) -> str:
        return self.file_path.suffix.lower().lstrip(".")


class FileSaveRequest(BaseModel):
    """
    WKT 파일 저장 요청을 위한 데이터 모델입니다.
    """
    output_path: Path = Field(..., description="결과를 저장할 파일 경로")
    append: bool = Field(default=False, description="기존 파일 뒤에 이어쓰기 여부")

    @field_validator("output_path")
    @classmethod
    def validate_output(cls, v: Path) -> Path:
        if v.exists() and v.is_dir():
            raise ValueError(f"저장 경로가 디렉토리입니다: {v}")
        return v.resolve()


class PipelineRequest(BaseModel):
    """
    CLI 경계에서 결정된 실행 옵션을 코어 파이프라인으로 전달하는 모델입니다.
    """
    input_path: Path
    output_path: Optional[Path] = None
    append: bool = False
    translate_x: int = 0
    translate_y: int = 0
    repair_crossings: bool = False
    export_formats: List[str] = Field(default_factory=list)

    @field_validator("export_formats")
    @classmethod
    def validate_export_formats(cls, v: List[str]) -> List[str]:
        return normalize_export_formats(v)

    @model_validator(mode="after")
    def fill_default_output(self) -> "PipelineRequest":
        if self.output_path is None:
            self.output_path = Path(f"{self.input_path}{OUTPUT_SUFFIX}")
        return self

    def load_request(self) -> FileLoadRequest:
        return FileLoadRequest(file_path=self.input_path)

    def save_request(self) -> FileSaveRequest:
        return FileSaveRequest(output_path=self.output_path, append=self.append)
