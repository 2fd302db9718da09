"""
Тесты классификатора
"""

from emojiset.alphabet import Classifier, Curation, DictionaryIndex


def test_acceptable_is_dictionary_membership_only(small_dictionary):
    classifier = Classifier(small_dictionary)
    assert classifier.is_acceptable(0x1F600)
    assert not classifier.is_acceptable(0x41)


def test_curated_lists_do_not_disqualify_kept_symbols(small_dictionary):
    curation = Curation(redundant=frozenset({0x1F600}), people_variant=frozenset({0x1F601}))
    classifier = Classifier(small_dictionary)
    classifier.build_exclusion_set([0x1F600, 0x1F601], [], curation)
    assert classifier.is_acceptable(0x1F600)
    assert classifier.is_acceptable(0x1F601)


def test_exclusion_set_categories(small_dictionary):
    curation = Curation(
        padding=(),
        redundant=frozenset({0x1F602}),
        future_spec=frozenset({0x1FAE9}),
        people_variant=frozenset({0x1F9D1}),
        main_overrides={1: 0x1F604},
        padding_overrides={0: 0x1F605},
    )
    classifier = Classifier(small_dictionary)
    exclusions = classifier.build_exclusion_set([0x1F600, 0x41], [0x2615], curation)

    assert exclusions.already_used == frozenset({0x1F600, 0x41, 0x2615})
    assert exclusions.redundant == frozenset({0x1F602})
    assert exclusions.future_spec == frozenset({0x1FAE9})
    assert exclusions.people_variant == frozenset({0x1F9D1})
    assert exclusions.explicit_override == frozenset({0x1F604, 0x1F605})
    assert 0x41 in exclusions
    assert 0x1F601 not in exclusions
    assert exclusions.categories_of(0x1F604) == ["explicit_override"]
    assert exclusions.all() >= {0x1F600, 0x1F602, 0x1FAE9, 0x1F9D1, 0x1F604, 0x1F605}


def test_auto_people_variants_adds_modifier_bases():
    dictionary = DictionaryIndex([
        chr(0x1F44B),
        chr(0x1F44B) + chr(0x1F3FB),
        chr(0x1F600),
    ])
    curation = Curation(people_variant=frozenset())

    plain = Classifier(dictionary).build_exclusion_set([], [], curation)
    auto = Classifier(dictionary, auto_people_variants=True).build_exclusion_set([], [], curation)

    assert plain.people_variant == frozenset()
    assert auto.people_variant == frozenset({0x1F44B})
