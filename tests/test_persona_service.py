from services.persona_service import PERSONAS, build_system_prompt, get_persona, list_personas


def test_known_role_prompt():
    prompt = build_system_prompt("cto")
    assert "Chief Technology Officer" in prompt
    assert "Riley" in prompt


def test_role_lookup_is_case_insensitive():
    assert get_persona(" CMO ") is PERSONAS["cmo"]


def test_unknown_role_falls_back_to_ceo():
    assert get_persona("janitor") is PERSONAS["ceo"]
    assert get_persona(None) is PERSONAS["ceo"]
    assert build_system_prompt("") == build_system_prompt("ceo")


def test_list_personas_hides_focus():
    personas = list_personas()
    assert [p["role"] for p in personas] == list(PERSONAS)
    assert all("focus" not in p for p in personas)
