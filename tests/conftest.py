import io
import json

import pytest
from rich.console import Console

from dg2srt.reporter import ConsoleReporter


def make_word(word, start, end, punctuated=None, speaker=None):
    entry = {"word": word, "start": start, "end": end, "confidence": 0.99}
    if punctuated is not None:
        entry["punctuated_word"] = punctuated
    if speaker is not None:
        entry["speaker"] = speaker
    return entry


def make_transcript(words, utterances=None):
    payload = {
        "metadata": {
            "created": "2024-01-01T00:00:00.000Z",
            "duration": 10.0,
            "channels": 1,
        },
        "results": {
            "channels": [
                {
                    "alternatives": [
                        {
                            "transcript": " ".join(w["word"] for w in words),
                            "confidence": 0.98,
                            "words": words,
                        }
                    ]
                }
            ]
        },
    }
    if utterances is not None:
        payload["results"]["utterances"] = utterances
    return payload


def contiguous_words(count, step=0.5):
    return [
        make_word(f"word{i}", round(i * step, 3), round((i + 1) * step, 3))
        for i in range(count)
    ]


@pytest.fixture
def transcript():
    return make_transcript([
        make_word("hello", 0.08, 0.4, "Hello"),
        make_word("world", 0.4, 0.9, "world."),
    ])


@pytest.fixture
def write_json(tmp_path):
    def _write(rel_path, payload):
        path = tmp_path / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(payload, str):
            path.write_text(payload, encoding="utf-8")
        else:
            path.write_text(json.dumps(payload), encoding="utf-8")
        return path
    return _write


class CapturedReporter(ConsoleReporter):
    """ConsoleReporter writing into string buffers."""

    def __init__(self):
        self.out = io.StringIO()
        self.err = io.StringIO()
        super().__init__(
            console=Console(file=self.out, highlight=False, width=200),
            error_console=Console(file=self.err, highlight=False, width=200),
        )

    @property
    def stdout(self):
        return self.out.getvalue()

    @property
    def stderr(self):
        return self.err.getvalue()


@pytest.fixture
def reporter():
    return CapturedReporter()
