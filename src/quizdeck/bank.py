"""
The built-in question bank: 15 questions per tier on the web DOM and
JavaScript, with every question kind represented in every tier.
"""

from __future__ import annotations

from collections import Counter

from .normalize import normalize
from .questions import (
    Blank,
    Difficulty,
    DropdownChoiceQuestion,
    FillBlanksQuestion,
    FreeTextQuestion,
    MatchPair,
    MatchPairsQuestion,
    MultiChoiceQuestion,
    Question,
    QuestionKind,
    SingleChoiceQuestion,
    contains_all,
    matches,
)

EASY = Difficulty.EASY
MEDIUM = Difficulty.MEDIUM
HARD = Difficulty.HARD


def _delegation_handler(text: str) -> bool:
    t = normalize(text)
    return all(part in t for part in ("addeventlistener", "click", "matches", ".btn"))


QUESTION_BANK: tuple[Question, ...] = (
    # ---------------- EASY ----------------
    SingleChoiceQuestion(
        id="e1", difficulty=EASY,
        title="Which method returns an element by its unique id?",
        options=("getElementById", "querySelectorAll", "getElementsByTagName", "getElementsByClassName"),
        correct_index=0,
    ),
    SingleChoiceQuestion(
        id="e2", difficulty=EASY,
        title="Which event fires on a mouse click?",
        options=("click", "submit", "input", "keydown"),
        correct_index=0,
    ),
    MultiChoiceQuestion(
        id="e3", difficulty=EASY,
        title="Select the DOM node types:",
        options=("Document", "Element", "Text", "Variable"),
        correct_indexes={0, 1, 2},
    ),
    DropdownChoiceQuestion(
        id="e4", difficulty=EASY,
        title="What does document.querySelector(selector) return?",
        options=(
            "The first element matching the selector",
            "All matching elements (a live collection)",
            "Only elements that have a class",
            "Nothing, ever",
        ),
        correct_value="The first element matching the selector",
    ),
    FillBlanksQuestion(
        id="e5", difficulty=EASY,
        title="Fill the blank: to cancel a form's default action, call ...",
        template="form.addEventListener('submit', (e) => { e.{0}(); });",
        blanks=(Blank("preventDefault", "method"),),
        help="Hint: it is a method of the event object.",
    ),
    FreeTextQuestion(
        id="e6", difficulty=EASY,
        title="Write one line of code that adds the class 'active' to el.",
        placeholder="e.g. el.classList.add('active');",
        validator=matches(r"classList\.add\(\s*['\"]active['\"]\s*\)"),
    ),
    SingleChoiceQuestion(
        id="e7", difficulty=EASY,
        title="Which option declares a variable that can be reassigned?",
        options=("let x = 5;", "const x = 5; (then reassign it)", "var x == 5;", "x := 5;"),
        correct_index=0,
    ),
    MultiChoiceQuestion(
        id="e8", difficulty=EASY,
        title="Select the array methods:",
        options=("map", "filter", "reduce", "appendChild"),
        correct_indexes={0, 1, 2},
    ),
    DropdownChoiceQuestion(
        id="e9", difficulty=EASY,
        title="How do you read the value of a text input?",
        options=("input.value", "input.text", "input.innerHTML", "input.checked"),
        correct_value="input.value",
    ),
    SingleChoiceQuestion(
        id="e10", difficulty=EASY,
        title="What is the DOM?",
        options=(
            "A tree model of the document made of objects",
            "The browser's database",
            "Only the page's CSS styles",
            "A server-side technology",
        ),
        correct_index=0,
    ),
    FreeTextQuestion(
        id="e11", difficulty=EASY,
        title="Fix the bug: the event handler must be attached correctly.",
        help="Use addEventListener.",
        starter="btn.onclick('click', () => console.log('ok'));",
        validator=contains_all("addEventListener", "click", normalized=False),
    ),
    FillBlanksQuestion(
        id="e12", difficulty=EASY,
        title="Fill the blank: get the element matching the class selector .box",
        template="const el = document.{0}('.box');",
        blanks=(Blank("querySelector", "method"),),
    ),
    SingleChoiceQuestion(
        id="e13", difficulty=EASY,
        title="What does document.getElementsByClassName return?",
        options=("HTMLCollection", "Array", "Number", "Promise"),
        correct_index=0,
    ),
    MultiChoiceQuestion(
        id="e14", difficulty=EASY,
        title="Select the form events:",
        options=("submit", "input", "change", "mousemove"),
        correct_indexes={0, 1, 2},
    ),
    MatchPairsQuestion(
        id="e15", difficulty=EASY, points=2,
        title="Match each DOM method with what it does",
        help="Drag the right description onto each method.",
        pairs=(
            MatchPair("getElementById", "Returns the element with the given id"),
            MatchPair("querySelectorAll", "Returns a NodeList of all elements matching a selector"),
            MatchPair("appendChild", "Adds a node as the last child"),
        ),
    ),
    # ---------------- MEDIUM ----------------
    SingleChoiceQuestion(
        id="m1", difficulty=MEDIUM, points=2,
        title="What is event bubbling?",
        options=(
            "The event travels up from the target through its ancestors to document",
            "The event always stops at the target",
            "The event only works on window",
            "The event only travels downwards (capturing)",
        ),
        correct_index=0,
    ),
    FreeTextQuestion(
        id="m2", difficulty=MEDIUM, points=2,
        title="Write event delegation: handle clicks on .btn inside .container",
        help="Needs addEventListener plus a check with e.target.matches('.btn')",
        placeholder=(
            "document.querySelector('.container').addEventListener('click', (e) => {\n"
            "  // ...\n"
            "});"
        ),
        validator=_delegation_handler,
    ),
    MultiChoiceQuestion(
        id="m3", difficulty=MEDIUM, points=2,
        title="Select the true statements about NodeList and HTMLCollection:",
        options=(
            "A NodeList from querySelectorAll is static (not updated automatically)",
            "An HTMLCollection is live (it can update)",
            "A NodeList is always live",
            "An HTMLCollection is a Promise",
        ),
        correct_indexes={0, 1},
    ),
    DropdownChoiceQuestion(
        id="m4", difficulty=MEDIUM, points=2,
        title="To allow a drop during dragover you need to:",
        options=(
            "Call e.preventDefault() in dragover",
            "Call stopPropagation() in drop",
            "Change innerHTML in dragstart",
            "Add a setTimeout",
        ),
        correct_value="Call e.preventDefault() in dragover",
    ),
    FillBlanksQuestion(
        id="m5", difficulty=MEDIUM, points=2,
        title="Fill the blank: turn FormData into a plain object",
        template="const data = Object.{0}(new FormData(form));",
        blanks=(Blank("fromEntries", "method"),),
    ),
    FreeTextQuestion(
        id="m6", difficulty=MEDIUM, points=2,
        title="Fix the code: the submit handler must cancel the default action and read the data.",
        starter=(
            "form.addEventListener('submit', (e) => {\n"
            "  const fd = new FormData(form);\n"
            "  console.log(Object.fromEntries(fd));\n"
            "});"
        ),
        validator=contains_all("preventDefault", "FormData", "fromEntries", normalized=False),
    ),
    SingleChoiceQuestion(
        id="m7", difficulty=MEDIUM, points=2,
        title="What is the difference between event.target and event.currentTarget?",
        options=(
            "target is where the event happened; currentTarget is where the handler is attached",
            "They are always the same",
            "currentTarget exists only for keyboard events",
            "target is always window",
        ),
        correct_index=0,
    ),
    MultiChoiceQuestion(
        id="m8", difficulty=MEDIUM, points=2,
        title="Select the ways to stop unwanted behaviour:",
        options=(
            "event.preventDefault()",
            "event.stopPropagation()",
            "event.resume()",
            "event.cancelBubble() (legacy)",
        ),
        correct_indexes={0, 1, 3},
    ),
    DropdownChoiceQuestion(
        id="m9", difficulty=MEDIUM, points=2,
        title="Which method sets a field's validity error message?",
        options=("setCustomValidity", "checkValidity", "getComputedStyle", "appendChild"),
        correct_value="setCustomValidity",
    ),
    FillBlanksQuestion(
        id="m10", difficulty=MEDIUM, points=2,
        title="Fill the blank: get the computed styles of an element",
        template="const styles = {0}(el);",
        blanks=(Blank("getComputedStyle", "function"),),
    ),
    SingleChoiceQuestion(
        id="m11", difficulty=MEDIUM, points=2,
        title="What does element.classList.toggle('x') do?",
        options=(
            "Adds or removes the class depending on whether it is present",
            "Removes every class",
            "Only adds the class",
            "Only checks whether the class is present",
        ),
        correct_index=0,
    ),
    FreeTextQuestion(
        id="m12", difficulty=MEDIUM, points=2,
        title="Write one line: read and parse JSON from localStorage under the key 'results'",
        placeholder="const data = JSON.parse(localStorage.getItem('results'));",
        validator=contains_all("json.parse", "localstorage.getitem", "results"),
    ),
    MatchPairsQuestion(
        id="m13", difficulty=MEDIUM, points=3,
        title="Match each event with when it fires",
        pairs=(
            MatchPair("DOMContentLoaded", "The DOM is built, resources may still be loading"),
            MatchPair("input", "A field's value changes while typing"),
            MatchPair("submit", "A form is submitted"),
        ),
    ),
    MultiChoiceQuestion(
        id="m14", difficulty=MEDIUM, points=2,
        title="Select the true statements about destructuring:",
        options=(
            "const {name} = obj extracts the name property",
            "const [a, b] = arr extracts the first array elements",
            "Destructuring only works with numbers",
            "Default values can be provided",
        ),
        correct_indexes={0, 1, 3},
    ),
    DropdownChoiceQuestion(
        id="m15", difficulty=MEDIUM, points=2,
        title="What does Array.prototype.find return?",
        options=(
            "The first element that satisfies the condition",
            "An array of all elements",
            "The number of elements",
            "A new sorted array",
        ),
        correct_value="The first element that satisfies the condition",
    ),
    # ---------------- HARD ----------------
    FreeTextQuestion(
        id="h1", difficulty=HARD, points=3,
        title="Write a one-liner that sums an array with reduce.",
        placeholder="const sum = arr.reduce((acc, x) => acc + x, 0);",
        validator=matches(
            r"reduce\s*\(\s*\(\s*acc\s*,\s*\w+\s*\)\s*=>\s*acc\s*\+\s*\w+\s*,\s*0\s*\)",
            collapse_whitespace=True,
        ),
    ),
    FreeTextQuestion(
        id="h2", difficulty=HARD, points=3,
        title="Fix the class: the info getter and setter must work correctly.",
        starter=(
            "class Person {\n"
            "  constructor(name, age) { this.name = name; this.age = age; }\n"
            "  get info() { return this.name + ', ' + this.age; }\n"
            "  set info(v) { [this.name, this.age] = v.split(','); }\n"
            "}"
        ),
        validator=contains_all("split", "this.name", "this.age", normalized=False),
    ),
    FillBlanksQuestion(
        id="h3", difficulty=HARD, points=3,
        title="Fill the blank: create a new div element",
        template="const div = document.{0}('div');",
        blanks=(Blank("createElement", "method"),),
    ),
    SingleChoiceQuestion(
        id="h4", difficulty=HARD, points=3,
        title="Why is event delegation useful?",
        options=(
            "One handler on a container instead of many (especially for dynamic elements)",
            "Because events do not bubble",
            "Because addEventListener is forbidden",
            "Because target is always document",
        ),
        correct_index=0,
    ),
    MultiChoiceQuestion(
        id="h5", difficulty=HARD, points=3,
        title="Select what belongs to ES6+ classes:",
        options=("constructor", "static methods", "extends/super", "typedef"),
        correct_indexes={0, 1, 2},
    ),
    DropdownChoiceQuestion(
        id="h6", difficulty=HARD, points=3,
        title="Which validity property reports a pattern mismatch?",
        options=("patternMismatch", "typeMismatch", "valueMissing", "rangeUnderflow"),
        correct_value="patternMismatch",
    ),
    MatchPairsQuestion(
        id="h7", difficulty=HARD, points=4,
        title="Match each event with its role in drag and drop",
        pairs=(
            MatchPair("dragstart", "Dragging begins; dataTransfer is set"),
            MatchPair("dragover", "Over a drop zone (needs preventDefault)"),
            MatchPair("drop", "The item is dropped into the zone"),
        ),
    ),
    FreeTextQuestion(
        id="h8", difficulty=HARD, points=3,
        title="Write code: create an element, set data-id='123' and append it to parent.",
        help="Any equivalent works: createElement + setAttribute + appendChild",
        placeholder=(
            "const el = document.createElement('div');\n"
            "el.setAttribute('data-id', '123');\n"
            "parent.appendChild(el);"
        ),
        validator=contains_all("createElement", "setAttribute", "data-id", "appendChild"),
    ),
    MultiChoiceQuestion(
        id="h9", difficulty=HARD, points=3,
        title="Select the true statements about localStorage:",
        options=(
            "It stores data as strings",
            "Data survives a page reload",
            "Objects need JSON.stringify",
            "localStorage encrypts data automatically",
        ),
        correct_indexes={0, 1, 2},
    ),
    DropdownChoiceQuestion(
        id="h10", difficulty=HARD, points=3,
        title="Which method checks an input's validity and returns a boolean?",
        options=("checkValidity()", "setCustomValidity()", "getAttribute()", "matches()"),
        correct_value="checkValidity()",
    ),
    FillBlanksQuestion(
        id="h11", difficulty=HARD, points=3,
        title="Fill the blanks: destructuring with renaming",
        template="const { name: {0}, age: {1} } = person;",
        blanks=(Blank("userName", "new variable"), Blank("userAge", "new variable")),
    ),
    FreeTextQuestion(
        id="h12", difficulty=HARD, points=3,
        title="Fix the bug: querySelectorAll returns a NodeList, but the items must be iterated.",
        starter=(
            "const items = document.querySelectorAll('.item');\n"
            "items.map(x => x.textContent);"
        ),
        validator=contains_all("forEach", normalized=False),
    ),
    SingleChoiceQuestion(
        id="h13", difficulty=HARD, points=3,
        title="What does Object.freeze(obj) do?",
        options=(
            "Makes the object immutable (no changing or adding properties)",
            "Deletes the object",
            "Sorts the object's keys",
            "Clones the object",
        ),
        correct_index=0,
    ),
    FreeTextQuestion(
        id="h14", difficulty=HARD, points=3,
        title="Write code: stop the event from bubbling inside a handler.",
        placeholder="event.stopPropagation();",
        validator=matches(r"stopPropagation\s*\(\s*\)"),
    ),
    SingleChoiceQuestion(
        id="h15", difficulty=HARD, points=3,
        title="What is the difference between innerHTML and textContent?",
        options=(
            "innerHTML parses HTML, textContent inserts plain text",
            "textContent inserts HTML, innerHTML only text",
            "They are always the same",
            "innerHTML only works with input",
        ),
        correct_index=0,
    ),
)


def _index(bank: tuple[Question, ...]) -> dict[str, Question]:
    by_id: dict[str, Question] = {}
    for question in bank:
        if question.id in by_id:
            raise ValueError(f"Duplicate question id {question.id!r}")
        by_id[question.id] = question
    return by_id


_BY_ID = _index(QUESTION_BANK)


def questions_for(difficulty: Difficulty | str, bank: tuple[Question, ...] = QUESTION_BANK) -> list[Question]:
    """All questions of one tier, in bank order."""
    difficulty = Difficulty(difficulty)
    return [q for q in bank if q.difficulty == difficulty]


def get_question(question_id: str) -> Question | None:
    return _BY_ID.get(question_id)


def bank_summary(bank: tuple[Question, ...] = QUESTION_BANK) -> dict[Difficulty, Counter[QuestionKind]]:
    """Count of questions per kind, for every tier."""
    summary: dict[Difficulty, Counter[QuestionKind]] = {d: Counter() for d in Difficulty}
    for question in bank:
        summary[question.difficulty][question.kind] += 1
    return summary
