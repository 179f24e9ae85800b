from mediasync.services.conditions import extract_year, matches_condition, parse_condition

def test_year_from_parentheses():
    assert extract_year("Movie (1999)") == 1999
    assert extract_year("The Thing (1982) [Remastered]") == 1982

def test_no_year_goes_none():
    assert extract_year("Movie") is None
    assert extract_year("Movie 1999") is None      # no parentheses
    assert extract_year("Movie (99)") is None       # not 4 digits

def test_first_year_wins():
    # two parenthesized years: only the first one counts
    assert extract_year("Remake (2019) of Original (1954)") == 2019

def test_year_gte_boundaries():
    assert not matches_condition("Year >= 2000", "Movie (1999)")
    assert matches_condition("Year >= 2000", "Movie (2000)")
    assert matches_condition("Year >= 2000", "Movie (2005)")

def test_every_operator():
    name = "Movie (2000)"
    assert matches_condition("Year == 2000", name)
    assert not matches_condition("Year != 2000", name)
    assert matches_condition("Year <= 2000", name)
    assert not matches_condition("Year < 2000", name)
    assert not matches_condition("Year > 2000", name)
    assert matches_condition("Year > 1999", name)
    assert matches_condition("Year < 2001", name)

def test_two_char_operators_parse_whole():
    # ">=" must not be read as ">" followed by a stray "="
    assert parse_condition("Year>=2000").operator == ">="
    assert parse_condition("Year <= 2000").operator == "<="
    assert parse_condition("Year != 2000").operator == "!="
    assert parse_condition("Year > 2000").operator == ">"

def test_empty_condition_matches_everything():
    for cond in (None, "", "   "):
        assert matches_condition(cond, "Movie (1999)")
        assert matches_condition(cond, "No Year Here")

def test_malformed_condition_never_matches():
    assert parse_condition("Year => 2000") is None
    assert not matches_condition("Year => 2000", "Movie (2005)")
    assert not matches_condition("Released after 2000", "Movie (2005)")
    assert not matches_condition("Year >= 20", "Movie (2005)")

def test_yearless_name_fails_present_condition():
    assert not matches_condition("Year >= 1900", "Home Videos")

def test_keyword_case_insensitive():
    cond = parse_condition("  year < 1990 ")
    assert cond.operator == "<" and cond.year == 1990
