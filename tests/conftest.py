"""
Shared pytest fixtures.
"""

import io

import numpy as np
import pytest
import soundfile as sf


def encode_audio(frames: np.ndarray, sample_rate: int, *, format: str = "WAV", subtype: str = "PCM_16") -> bytes:
    buffer = io.BytesIO()
    sf.write(buffer, frames, sample_rate, format=format, subtype=subtype)
    return buffer.getvalue()


@pytest.fixture
def make_audio_file():
    """Factory building an in-memory audio file of a sine tone."""

    def _make(
        *,
        sample_rate: int = 44100,
        channels: int = 2,
        seconds: float = 1.0,
        format: str = "WAV",
        subtype: str = "PCM_16",
    ) -> bytes:
        t = np.arange(int(round(sample_rate * seconds)), dtype=np.float64) / sample_rate
        tone = 0.25 * np.sin(2 * np.pi * 440.0 * t)
        frames = np.stack([tone * (ch + 1) / channels for ch in range(channels)], axis=1)
        return encode_audio(frames.astype(np.float32), sample_rate, format=format, subtype=subtype)

    return _make


@pytest.fixture
def sample_report_json():
    return {
        "ko": {
            "title": "주간 영업 회의",
            "date": "2025-01-15",
            "participants": ["김민수", "이지은"],
            "summary": "1분기 판매 목표와 신규 대리점 계약을 논의했다.",
            "discussion": [{"topic": "판매 목표", "content": "1분기 목표를 10% 상향하기로 했다."}],
            "decisions": ["신규 대리점 두 곳과 계약"],
            "actionItems": [{"task": "계약서 초안 작성", "assignee": "이지은", "due": "2025-01-22"}],
        },
        "en": {
            "title": "Weekly Sales Meeting",
            "date": "2025-01-15",
            "participants": ["Minsu Kim", "Jieun Lee"],
            "summary": "The team discussed Q1 sales targets and new dealer contracts.",
            "discussion": [{"topic": "Sales targets", "content": "Q1 target raised by 10%."}],
            "decisions": ["Sign contracts with two new dealers"],
            "actionItems": [{"task": "Draft contracts", "assignee": "Jieun Lee", "due": "2025-01-22"}],
        },
    }
