from campus_housing.utils.slug_utils import SlugHelper, UniqueUsernameGenerator


def test_student_username_is_ascii():
    assert SlugHelper.generate_student_username("Đorđe", "Šćepanović") == "djordje.scepanovic"
    assert SlugHelper.generate_student_username("Ana Marija", "Ilić") == "anamarija.ilic"
    assert SlugHelper.generate_student_username("???", "!!!") == "student"


def test_slug_transliterates_letters_without_decomposition():
    assert SlugHelper.create_slug("Đurđevak") == "djurdjevak"
    assert SlugHelper.create_slug("Małgorzata") == "malgorzata"


def test_unique_username_adds_suffix():
    taken = {"ana.anic", "ana.anic1"}
    generator = UniqueUsernameGenerator(taken.__contains__)
    assert generator.generate("Ana", "Anic") == "ana.anic2"


def test_unique_username_falls_back_to_random():
    generator = UniqueUsernameGenerator(lambda _: False, max_attempts=0)
    assert generator.generate("Ana", "Anic") == "ana.anic"

    always_taken = UniqueUsernameGenerator(lambda name: not name.startswith("ana.anic-"), max_attempts=2)
    assert always_taken.generate("Ana", "Anic").startswith("ana.anic-")
