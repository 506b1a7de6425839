import re

import pytest

from conftest import contiguous_words, make_transcript, make_word

from dg2srt.exceptions import FormatError
from dg2srt.models import Caption, TranscriptShape
from dg2srt.subtitle_formatter import (
    SRTFormatter,
    VTTFormatter,
    build_captions,
    get_formatter,
)

SRT_TIMING = re.compile(r"^(\d{2,}):(\d{2}):(\d{2}),(\d{3}) --> (\d{2,}):(\d{2}):(\d{2}),(\d{3})$")


def _to_ms(h, m, s, ms):
    return ((int(h) * 60 + int(m)) * 60 + int(s)) * 1000 + int(ms)


def test_build_captions_chunks_words():
    payload = make_transcript(contiguous_words(20))
    captions = build_captions(payload, TranscriptShape.CHANNEL, words_per_line=8)

    assert [c.index for c in captions] == [1, 2, 3]
    assert [len(c.text.split()) for c in captions] == [8, 8, 4]
    assert captions[0].start_time == 0.0
    assert captions[0].end_time == 4.0
    assert captions[2].start_time == 8.0
    assert captions[2].end_time == 10.0


def test_build_captions_prefers_punctuated_word(transcript):
    captions = build_captions(transcript, TranscriptShape.CHANNEL)
    assert len(captions) == 1
    assert captions[0].text == "Hello world."


def test_build_captions_only_uses_first_alternative():
    payload = make_transcript([make_word("first", 0.0, 1.0)])
    payload["results"]["channels"][0]["alternatives"].append(
        {"words": [make_word("second", 0.0, 1.0)]}
    )
    payload["results"]["channels"].append(
        {"alternatives": [{"words": [make_word("third", 0.0, 1.0)]}]}
    )
    captions = build_captions(payload, TranscriptShape.CHANNEL)
    assert [c.text for c in captions] == ["first"]


def test_build_captions_empty_transcripts():
    assert build_captions(make_transcript([]), TranscriptShape.CHANNEL) == []

    payload = make_transcript([])
    payload["results"]["channels"] = []
    assert build_captions(payload, TranscriptShape.CHANNEL) == []

    payload["results"]["channels"] = [{"alternatives": []}]
    assert build_captions(payload, TranscriptShape.CHANNEL) == []


def test_build_captions_keeps_utterances_apart():
    utterances = [
        {"speaker": 0, "words": [make_word("a", 0.0, 0.5), make_word("b", 0.5, 1.0)]},
        {"speaker": 1, "words": [make_word("c", 1.2, 1.5)]},
    ]
    payload = make_transcript(contiguous_words(3), utterances)
    captions = build_captions(payload, TranscriptShape.UTTERANCE, words_per_line=8)

    assert [(c.index, c.text, c.speaker) for c in captions] == [
        (1, "a b", 0),
        (2, "c", 1),
    ]


def test_build_captions_word_speaker_wins():
    words = [make_word("a", 0.0, 0.5, speaker=3)]
    captions = build_captions(make_transcript(words), TranscriptShape.CHANNEL)
    assert captions[0].speaker == 3


def test_build_captions_rejects_bad_words_per_line(transcript):
    with pytest.raises(FormatError):
        build_captions(transcript, TranscriptShape.CHANNEL, words_per_line=0)


def test_build_captions_wraps_traversal_errors(transcript):
    # Claims utterances but has none
    with pytest.raises(FormatError):
        build_captions(transcript, TranscriptShape.UTTERANCE)

    transcript["results"]["channels"][0]["alternatives"][0]["words"][0]["punctuated_word"] = 7
    with pytest.raises(FormatError):
        build_captions(transcript, TranscriptShape.CHANNEL)


def test_srt_output(transcript):
    captions = build_captions(transcript, TranscriptShape.CHANNEL)
    assert SRTFormatter().format(captions) == (
        "1\n"
        "00:00:00,080 --> 00:00:00,900\n"
        "Hello world.\n"
        "\n"
    )


def test_srt_indices_and_timings_are_ordered():
    payload = make_transcript(contiguous_words(37, step=0.37))
    text = SRTFormatter().format(build_captions(payload, TranscriptShape.CHANNEL))

    blocks = text.strip("\n").split("\n\n")
    assert len(blocks) == 5
    previous_end = -1
    for expected_index, block in enumerate(blocks, start=1):
        index_line, timing_line, caption_line = block.split("\n")
        assert int(index_line) == expected_index
        match = SRT_TIMING.match(timing_line)
        assert match
        start = _to_ms(*match.groups()[:4])
        end = _to_ms(*match.groups()[4:])
        assert end >= start
        assert start >= previous_end
        previous_end = end
        assert caption_line


def test_srt_speaker_label_only_on_change():
    captions = [
        Caption(1, 0.0, 1.0, "one", speaker=0),
        Caption(2, 1.0, 2.0, "two", speaker=0),
        Caption(3, 2.0, 3.0, "three", speaker=1),
    ]
    assert SRTFormatter().format(captions) == (
        "1\n00:00:00,000 --> 00:00:01,000\n[speaker 0]\none\n\n"
        "2\n00:00:01,000 --> 00:00:02,000\ntwo\n\n"
        "3\n00:00:02,000 --> 00:00:03,000\n[speaker 1]\nthree\n\n"
    )


def test_srt_rejects_negative_timestamp():
    with pytest.raises(FormatError):
        SRTFormatter().format([Caption(1, -1.0, 1.0, "bad")])


def test_srt_rejects_nan_timestamp():
    with pytest.raises(FormatError):
        SRTFormatter().format([Caption(1, 0.0, float("nan"), "bad")])


def test_vtt_output():
    captions = [
        Caption(1, 0.0, 1.5, "plain"),
        Caption(2, 1.5, 2.0, "voiced", speaker=2),
    ]
    assert VTTFormatter().format(captions) == (
        "WEBVTT\n\n"
        "00:00:00.000 --> 00:00:01.500\nplain\n\n"
        "00:00:01.500 --> 00:00:02.000\n<v Speaker 2>voiced\n\n"
    )


def test_get_formatter():
    assert isinstance(get_formatter("srt"), SRTFormatter)
    assert isinstance(get_formatter("VTT"), VTTFormatter)
    assert get_formatter("srt").extension == ".srt"
    with pytest.raises(FormatError):
        get_formatter("ass")


def test_build_captions_splits_on_speaker_change():
    words = [
        make_word("hi", 0.0, 0.5, speaker=0),
        make_word("yo", 0.5, 1.0, speaker=1),
        make_word("there", 1.0, 1.5, speaker=1),
        make_word("back", 1.5, 2.0, speaker=0),
    ]
    captions = build_captions(make_transcript(words), TranscriptShape.CHANNEL)

    assert [(c.text, c.speaker, c.start_time, c.end_time) for c in captions] == [
        ("hi", 0, 0.0, 0.5),
        ("yo there", 1, 0.5, 1.5),
        ("back", 0, 1.5, 2.0),
    ]
    assert SRTFormatter().format(captions) == (
        "1\n00:00:00,000 --> 00:00:00,500\n[speaker 0]\nhi\n\n"
        "2\n00:00:00,500 --> 00:00:01,500\n[speaker 1]\nyo there\n\n"
        "3\n00:00:01,500 --> 00:00:02,000\n[speaker 0]\nback\n\n"
    )
