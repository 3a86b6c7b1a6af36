import time
from concurrent.futures import ThreadPoolExecutor

from core.languages import language_table_from_dict
from core.release_name import (
    Found,
    NotFound,
    TAG_MATCHERS,
    clean_release_name,
    get_release_from_sub_filename,
    match_disc,
    match_language_code,
    match_regional_code,
    match_sdh,
    strip_subtitle_extension,
)

LANGUAGES = language_table_from_dict(
    {
        "en": {"iso639": "eng", "language_code": "en", "languageName": "English", "displayName": "English"},
        "es": {"iso639": "spa", "language_code": "es", "languageName": "Spanish", "displayName": "Spanish"},
        "pt": {"iso639": "por", "language_code": "pt", "languageName": "Portuguese", "displayName": "Portuguese"},
        "fr": {"iso639": "fre", "language_code": "fr", "languageName": "French", "displayName": "French"},
    }
)


def _raw(name: str, release_name_mode: bool = False):
    return get_release_from_sub_filename(name, LANGUAGES, release_name_mode)


def test_strips_trailing_language_code() -> None:
    assert _raw("Movie.Name.2024.eng.srt") == Found(" Movie.Name.2024")


def test_separator_style_is_irrelevant() -> None:
    assert _raw("Movie.Name-eng.srt") == Found(" Movie.Name")
    assert _raw("Movie.Name_eng.srt") == Found(" Movie.Name")
    assert _raw("Movie.Name eng.srt") == Found(" Movie.Name")


def test_separator_runs_collapse() -> None:
    assert _raw("Movie.Name...eng.srt") == Found(" Movie.Name")
    assert _raw("Movie.Name._-eng.srt") == Found(" Movie.Name")


def test_chained_tags_collapse() -> None:
    assert _raw("Movie.Name.CD1.eng.srt") == Found(" Movie.Name")
    assert _raw("Movie.Name.CD I.eng.srt") == Found(" Movie.Name")
    assert _raw("Movie.Name.eng.sdh.srt") == Found(" Movie.Name")
    assert _raw("Movie.Name.2024.CD2.pt-BR.sdh.srt") == Found(" Movie.Name.2024")


def test_full_language_names() -> None:
    assert _raw("Movie.Name.English.srt") == Found(" Movie.Name")
    assert _raw("Movie.Name.ENGLISH.srt") == Found(" Movie.Name")
    assert _raw(
        "Prisoner.of.War.2025.1080p.AMZN.WEB-DL.DDP5.1.H.264.v2.spanish.srt"
    ) == Found(" Prisoner.of.War.2025.1080p.AMZN.WEB-DL.DDP5.1.H.264.v2")


def test_regional_codes_strip_as_a_unit() -> None:
    assert _raw("Movie.Name.2024.pt-BR.srt") == Found(" Movie.Name.2024")
    assert _raw("Movie.Name.2024.pt-PT.srt") == Found(" Movie.Name.2024")
    assert _raw("Movie.Name.pt-br.srt") == Found(" Movie.Name")
    assert _raw("Movie.Name.en-US.srt") == Found(" Movie.Name")
    assert _raw("Movie.Name.en-GB.sdh.srt") == Found(" Movie.Name")
    assert _raw(
        "Prisoner.of.War.2025.1080p.AMZN.WEB-DL.DDP5.1.H.264.v2.pt-PT.srt"
    ) == Found(" Prisoner.of.War.2025.1080p.AMZN.WEB-DL.DDP5.1.H.264.v2")


def test_leading_tag_is_never_stripped() -> None:
    assert _raw("English.Patient.2024.srt") == Found(" English.Patient.2024")


def test_code_inside_a_word_is_not_stripped() -> None:
    assert _raw("The.Bourne.Legacy.srt") == Found(" The.Bourne.Legacy")
    assert _raw("Movie.Spanglish.srt") == Found(" Movie.Spanglish")


def test_too_short_results_fail() -> None:
    assert _raw("ab.eng.srt") == NotFound("too_short")
    assert _raw("eng.srt") == NotFound("too_short")
    assert _raw("") == NotFound("empty")


def test_minimum_length_is_accepted() -> None:
    assert _raw("abc.eng.srt") == Found(" abc")


def test_filename_without_extension() -> None:
    assert _raw("Movie.Name.eng") == Found(" Movie.Name")


def test_release_name_mode_skips_extension_removal() -> None:
    assert _raw("Movie.Name.eng", release_name_mode=True) == Found(" Movie.Name")
    assert _raw("Movie.Name.srt", release_name_mode=True) == Found(" Movie.Name.srt")
    assert _raw("Movie.Name.srt") == Found(" Movie.Name")


def test_only_one_extension_is_removed() -> None:
    assert strip_subtitle_extension("Movie.srt.srt") == "Movie.srt"
    assert strip_subtitle_extension("Movie.Name.SRT") == "Movie.Name"
    assert strip_subtitle_extension("Movie.Name.mkv") == "Movie.Name.mkv"


def test_site_watermark_is_stripped() -> None:
    assert _raw("Movie.Name.S01E02.English.addic7ed.com.srt") == Found(" Movie.Name.S01E02")


def test_edge_punctuation_is_trimmed() -> None:
    assert _raw("=Movie.Name-.eng.srt") == Found(" Movie.Name")


def test_unknown_regional_language_is_kept() -> None:
    assert _raw("Movie.Name.xx-YY.srt") == Found(" Movie.Name.xx-YY")


def test_region_half_is_not_stripped_as_a_code() -> None:
    assert _raw("Movie.Name.xx-FR.srt") == Found(" Movie.Name.xx-FR")
    assert _raw("Movie.Name.xx-ES.eng.srt") == Found(" Movie.Name.xx-ES")
    assert _raw("Movie.Name.WEB-ES.srt") == Found(" Movie.Name.WEB")


def test_bundled_table_keeps_unknown_regional_tail() -> None:
    from core.languages import load_language_table

    assert get_release_from_sub_filename("Movie.Name.xx-IT.srt", load_language_table()) == Found(
        " Movie.Name.xx-IT"
    )


def test_uppercase_codes_and_spaced_disc_markers() -> None:
    assert _raw("Movie.Name.ENG.srt") == Found(" Movie.Name")
    assert _raw("Movie.Name.Eng.SDH.srt") == Found(" Movie.Name")
    assert _raw("Movie.Name.CD 1.srt") == Found(" Movie.Name")
    assert _raw("Movie.Name cd 2 spa.srt") == Found(" Movie.Name")


def test_only_listed_characters_separate_tags() -> None:
    assert _raw("Movie.Name\teng.srt") == Found(" Movie.Name\teng")
    assert _raw("Movie.Name\neng") == Found(" Movie.Name\neng")


def test_long_separator_runs_stay_fast() -> None:
    name = "a" + "." * 5000 + "b.srt"
    started = time.perf_counter()
    assert _raw(name) == Found(" " + name[:-4])
    assert _raw("Movie" + "-_ ." * 2000 + "eng.srt") == Found(" Movie")
    assert time.perf_counter() - started < 2.0


def test_matchers_report_consumed_length() -> None:
    index = None
    assert match_sdh("Movie..SDH", index).length == len("..SDH")
    assert match_disc("Movie-cd 1", index).length == len("-cd 1")
    assert match_sdh("Movie.sdhx", index) is None
    assert match_disc("Movie.CD II", index) is None


def test_code_matchers_consult_the_table() -> None:
    from core.release_name import _build_index

    index = _build_index(LANGUAGES, ())
    assert match_language_code("Movie.Name.eng", index).length == len(".eng")
    assert match_language_code("Movie.Name.deu", index) is None
    assert match_regional_code("Movie.Name.fr-CA", index).length == len(".fr-CA")
    assert match_regional_code("Movie.Name.de-AT", index) is None
    assert [m.__name__ for m in TAG_MATCHERS] == [
        "match_sdh",
        "match_disc",
        "match_regional_code",
        "match_language_code",
        "match_language_name",
    ]


def test_empty_table_strips_only_markers() -> None:
    assert get_release_from_sub_filename("Movie.Name.eng.CD1.srt", {}, extra_names=()) == Found(" Movie.Name.eng")


def test_clean_release_name_trims_leading_space() -> None:
    assert clean_release_name("Movie.Name.2024.eng", LANGUAGES) == "Movie.Name.2024"
    assert clean_release_name(
        "The.Movie.Name.2024.1080p.BluRay.x264.eng", LANGUAGES
    ) == "The.Movie.Name.2024.1080p.BluRay.x264"


def test_clean_release_name_returns_input_on_failure() -> None:
    assert clean_release_name("ab", LANGUAGES) == "ab"
    assert clean_release_name("ab.eng.srt", LANGUAGES) == "ab.eng.srt"
    assert clean_release_name("", LANGUAGES) == ""


def test_clean_release_name_never_returns_leading_space() -> None:
    for name in ["Movie.Name.eng.srt", " Movie.Name", "x", "Movie.Name.CD1", "...eng"]:
        result = clean_release_name(name, LANGUAGES)
        assert result == name or not result.startswith(" ")


def test_clean_release_name_is_idempotent() -> None:
    for name in ["Movie.Name.2024.1080p.BluRay.x264", "English.Patient.2024", "Top Gun 1986"]:
        once = clean_release_name(name, LANGUAGES)
        assert once == name
        assert clean_release_name(once, LANGUAGES) == once


def test_results_do_not_depend_on_previous_calls() -> None:
    names = ["Movie.Name.eng.srt", "ab.eng.srt", "Movie.Name.pt-BR.srt"] * 20
    expected = [_raw(name) for name in names]
    with ThreadPoolExecutor(max_workers=4) as pool:
        assert list(pool.map(_raw, names)) == expected
