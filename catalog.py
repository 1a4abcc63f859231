from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

DIFFICULTIES: tuple[str, ...] = ("easy", "medium", "hard")
DEFAULT_LANGUAGE = "python"
DEFAULT_DIFFICULTY = "easy"


@dataclass(frozen=True)
class Language:
    key: str
    name: str
    tagline: str
    icon: str


@dataclass(frozen=True)
class PracticeSnippet:
    language: str
    difficulty: str
    text: str


@dataclass(frozen=True)
class Lesson:
    id: str
    title: str
    description: str
    theory: str
    code: str
    output: Optional[str] = None


LANGUAGES: dict[str, Language] = {
    "c": Language("c", "C", "Master the foundation of programming", "C"),
    "cpp": Language("cpp", "C++", "Object-oriented programming excellence", "C++"),
    "python": Language("python", "Python", "Versatile and beginner-friendly", "Py"),
    "java": Language("java", "Java", "Enterprise-grade applications", "Jv"),
    "javascript": Language("javascript", "JavaScript", "Power of the modern web", "JS"),
}

MOTIVATIONAL_QUOTES = [
    "Code is poetry written in logic.",
    "Every expert was once a beginner.",
    "Practice makes progress!",
    "The best way to learn is by doing.",
    "Keep coding, keep growing!",
    "Your only limit is your commitment.",
]

# ---- Typing practice snippets ----
SNIPPETS: dict[str, dict[str, str]] = {
    "c": {
        "easy": '#include <stdio.h>\nint main() {\n    printf("Hello");\n    return 0;\n}',
        "medium": 'for (int i = 0; i < 10; i++) {\n    if (i % 2 == 0) {\n        printf("%d ", i);\n    }\n}',
        "hard": "int fibonacci(int n) {\n    if (n <= 1) return n;\n    return fibonacci(n-1) + fibonacci(n-2);\n}",
    },
    "cpp": {
        "easy": '#include <iostream>\nusing namespace std;\nint main() {\n    cout << "Hello";\n    return 0;\n}',
        "medium": 'vector<int> nums = {1, 2, 3, 4, 5};\nfor (int num : nums) {\n    cout << num << " ";\n}',
        "hard": "class Node {\npublic:\n    int data;\n    Node* next;\n    Node(int val) : data(val), next(nullptr) {}\n};",
    },
    "python": {
        "easy": 'print("Hello, World!")\nname = "Python"\nprint(f"I love {name}")',
        "medium": "def factorial(n):\n    return 1 if n <= 1 else n * factorial(n-1)\n\nprint(factorial(5))",
        "hard": (
            "class LinkedList:\n"
            "    def __init__(self):\n"
            "        self.head = None\n"
            "    \n"
            "    def append(self, data):\n"
            "        new_node = Node(data)\n"
            "        if not self.head:\n"
            "            self.head = new_node\n"
            "            return\n"
            "        current = self.head\n"
            "        while current.next:\n"
            "            current = current.next\n"
            "        current.next = new_node"
        ),
    },
    "java": {
        "easy": 'public class Main {\n    public static void main(String[] args) {\n        System.out.println("Hello");\n    }\n}',
        "medium": 'int[] numbers = {1, 2, 3, 4, 5};\nfor (int num : numbers) {\n    System.out.print(num + " ");\n}',
        "hard": (
            "public class BinarySearch {\n"
            "    public int search(int[] arr, int target) {\n"
            "        int left = 0, right = arr.length - 1;\n"
            "        while (left <= right) {\n"
            "            int mid = left + (right - left) / 2;\n"
            "            if (arr[mid] == target) return mid;\n"
            "            else if (arr[mid] < target) left = mid + 1;\n"
            "            else right = mid - 1;\n"
            "        }\n"
            "        return -1;\n"
            "    }\n"
            "}"
        ),
    },
    "javascript": {
        "easy": 'console.log("Hello, JavaScript!");\nconst name = "JS";\nconsole.log(`I love ${name}`);',
        "medium": "const numbers = [1, 2, 3, 4, 5];\nconst doubled = numbers.map(n => n * 2);\nconsole.log(doubled);",
        "hard": (
            "class LinkedList {\n"
            "    constructor() {\n"
            "        this.head = null;\n"
            "    }\n"
            "    \n"
            "    append(data) {\n"
            "        const newNode = { data, next: null };\n"
            "        if (!this.head) {\n"
            "            this.head = newNode;\n"
            "            return;\n"
            "        }\n"
            "        let current = this.head;\n"
            "        while (current.next) {\n"
            "            current = current.next;\n"
            "        }\n"
            "        current.next = newNode;\n"
            "    }\n"
            "}"
        ),
    },
}

# ---- Lessons ----
LESSONS: dict[str, list[Lesson]] = {
    "c": [
        Lesson(
            "c-1",
            "Introduction to C",
            "Learn about C programming language basics",
            "C is a general-purpose programming language created by Dennis Ritchie in 1972. "
            "It's powerful, efficient, and forms the foundation of many modern programming languages.",
            '#include <stdio.h>\n\nint main() {\n    printf("Hello, World!\\n");\n    return 0;\n}',
            "Hello, World!",
        ),
        Lesson(
            "c-2",
            "Variables and Data Types",
            "Understanding variables and basic data types in C",
            "Variables are containers for storing data values. C has several basic data types: "
            "int (integers), float (decimal numbers), char (characters), and double (large decimal numbers).",
            "#include <stdio.h>\n\nint main() {\n    int age = 25;\n    float height = 5.9;\n    char grade = 'A';\n"
            '    \n    printf("Age: %d\\n", age);\n    printf("Height: %.1f\\n", height);\n'
            '    printf("Grade: %c\\n", grade);\n    \n    return 0;\n}',
            "Age: 25\nHeight: 5.9\nGrade: A",
        ),
        Lesson(
            "c-3",
            "If-Else Statements",
            "Learn conditional statements",
            "If-else statements allow you to execute different code based on conditions. "
            "They help make decisions in your programs.",
            "#include <stdio.h>\n\nint main() {\n    int number = 10;\n    \n    if (number > 0) {\n"
            '        printf("Positive number\\n");\n    } else if (number < 0) {\n'
            '        printf("Negative number\\n");\n    } else {\n        printf("Zero\\n");\n    }\n'
            "    \n    return 0;\n}",
            "Positive number",
        ),
        Lesson(
            "c-4",
            "Loops - For Loop",
            "Master iteration with for loops",
            "For loops allow you to repeat code a specific number of times. "
            "They consist of initialization, condition, and increment/decrement.",
            '#include <stdio.h>\n\nint main() {\n    for (int i = 1; i <= 5; i++) {\n        printf("%d ", i);\n    }\n'
            '    printf("\\n");\n    return 0;\n}',
            "1 2 3 4 5",
        ),
        Lesson(
            "c-5",
            "Arrays",
            "Working with arrays in C",
            "Arrays are collections of elements of the same data type stored in contiguous memory locations. "
            "They allow you to store multiple values in a single variable.",
            "#include <stdio.h>\n\nint main() {\n    int numbers[5] = {10, 20, 30, 40, 50};\n    \n"
            '    for (int i = 0; i < 5; i++) {\n        printf("%d ", numbers[i]);\n    }\n'
            '    printf("\\n");\n    \n    return 0;\n}',
            "10 20 30 40 50",
        ),
        Lesson(
            "c-6",
            "Functions",
            "Create reusable code with functions",
            "Functions are blocks of code that perform specific tasks. "
            "They help organize code, make it reusable, and easier to maintain.",
            "#include <stdio.h>\n\nint add(int a, int b) {\n    return a + b;\n}\n\nint main() {\n"
            '    int result = add(5, 3);\n    printf("Sum: %d\\n", result);\n    return 0;\n}',
            "Sum: 8",
        ),
    ],
    "cpp": [
        Lesson(
            "cpp-1",
            "Introduction to C++",
            "Learn about C++ and its features",
            "C++ is an object-oriented programming language that extends C. "
            "It supports classes, objects, inheritance, polymorphism, and more.",
            '#include <iostream>\nusing namespace std;\n\nint main() {\n    cout << "Hello, C++!" << endl;\n    return 0;\n}',
            "Hello, C++!",
        ),
        Lesson(
            "cpp-2",
            "Classes and Objects",
            "Understanding OOP basics in C++",
            "Classes are blueprints for creating objects. "
            "Objects are instances of classes that contain data (attributes) and functions (methods).",
            "#include <iostream>\nusing namespace std;\n\nclass Dog {\npublic:\n    string name;\n    void bark() {\n"
            '        cout << name << " says Woof!" << endl;\n    }\n};\n\nint main() {\n    Dog myDog;\n'
            '    myDog.name = "Buddy";\n    myDog.bark();\n    return 0;\n}',
            "Buddy says Woof!",
        ),
        Lesson(
            "cpp-3",
            "Constructors",
            "Learn about constructors in C++",
            "Constructors are special methods that are automatically called when an object is created. "
            "They initialize object properties.",
            "#include <iostream>\nusing namespace std;\n\nclass Person {\npublic:\n    string name;\n    int age;\n"
            "    \n    Person(string n, int a) {\n        name = n;\n        age = a;\n    }\n};\n\nint main() {\n"
            '    Person person1("Alice", 25);\n    cout << person1.name << " is " << person1.age << endl;\n'
            "    return 0;\n}",
            "Alice is 25",
        ),
        Lesson(
            "cpp-4",
            "Inheritance",
            "Master inheritance in C++",
            "Inheritance allows a class to inherit properties and methods from another class. "
            "It promotes code reusability.",
            "#include <iostream>\nusing namespace std;\n\nclass Animal {\npublic:\n    void eat() {\n"
            '        cout << "Eating..." << endl;\n    }\n};\n\nclass Cat : public Animal {\npublic:\n'
            '    void meow() {\n        cout << "Meow!" << endl;\n    }\n};\n\nint main() {\n    Cat myCat;\n'
            "    myCat.eat();\n    myCat.meow();\n    return 0;\n}",
            "Eating...\nMeow!",
        ),
    ],
    "python": [
        Lesson(
            "python-1",
            "Introduction to Python",
            "Get started with Python programming",
            "Python is a high-level, interpreted programming language known for its simplicity and "
            "readability. It's perfect for beginners and powerful for experts.",
            'print("Hello, Python!")',
            "Hello, Python!",
        ),
        Lesson(
            "python-2",
            "Variables and Data Types",
            "Learn about Python variables",
            "Python has dynamic typing - you don't need to declare variable types. "
            "Common types include int, float, str, bool, list, dict, and tuple.",
            'name = "Alice"\nage = 25\nheight = 5.6\nis_student = True\n\nprint(f"{name} is {age} years old")',
            "Alice is 25 years old",
        ),
        Lesson(
            "python-3",
            "Lists and Loops",
            "Working with lists and iteration",
            "Lists are ordered, mutable collections. For loops allow you to iterate through sequences easily.",
            'fruits = ["apple", "banana", "cherry"]\n\nfor fruit in fruits:\n    print(fruit)',
            "apple\nbanana\ncherry",
        ),
        Lesson(
            "python-4",
            "Functions",
            "Create reusable code with functions",
            "Functions in Python are defined using the 'def' keyword. They can take parameters and return values.",
            'def greet(name):\n    return f"Hello, {name}!"\n\nprint(greet("World"))',
            "Hello, World!",
        ),
        Lesson(
            "python-5",
            "Dictionaries",
            "Master Python dictionaries",
            "Dictionaries store key-value pairs. They're unordered, mutable, and very efficient for lookups.",
            'person = {\n    "name": "Bob",\n    "age": 30,\n    "city": "New York"\n}\n\n'
            'print(person["name"])\nprint(person.get("age"))',
            "Bob\n30",
        ),
    ],
    "java": [
        Lesson(
            "java-1",
            "Introduction to Java",
            "Learn Java programming basics",
            "Java is a robust, object-oriented programming language. "
            "It follows the principle of 'Write Once, Run Anywhere' (WORA).",
            'public class Main {\n    public static void main(String[] args) {\n        System.out.println("Hello, Java!");\n    }\n}',
            "Hello, Java!",
        ),
        Lesson(
            "java-2",
            "Variables and Data Types",
            "Understanding Java data types",
            "Java is strongly typed. Common data types include int, double, boolean, char, and String (object type).",
            "public class Main {\n    public static void main(String[] args) {\n        int age = 25;\n"
            '        double salary = 50000.50;\n        String name = "John";\n        \n'
            '        System.out.println(name + " is " + age);\n    }\n}',
            "John is 25",
        ),
        Lesson(
            "java-3",
            "Classes and Objects",
            "Master OOP in Java",
            "Everything in Java is an object. Classes are templates for creating objects with properties and methods.",
            "class Car {\n    String brand;\n    int year;\n    \n    void displayInfo() {\n"
            '        System.out.println(brand + " - " + year);\n    }\n}\n\npublic class Main {\n'
            "    public static void main(String[] args) {\n        Car myCar = new Car();\n"
            '        myCar.brand = "Toyota";\n        myCar.year = 2020;\n        myCar.displayInfo();\n    }\n}',
            "Toyota - 2020",
        ),
    ],
    "javascript": [
        Lesson(
            "js-1",
            "Introduction to JavaScript",
            "Learn the language of the web",
            "JavaScript is a versatile programming language that powers interactive web pages. "
            "It runs in browsers and on servers (Node.js).",
            'console.log("Hello, JavaScript!");',
            "Hello, JavaScript!",
        ),
        Lesson(
            "js-2",
            "Variables - let, const, var",
            "Understanding JavaScript variables",
            "JavaScript has three ways to declare variables: var (old way), let (block-scoped), "
            "and const (constant, cannot be reassigned).",
            'let name = "Alice";\nconst age = 25;\nvar city = "New York";\n\n'
            "console.log(`${name} is ${age} years old`);",
            "Alice is 25 years old",
        ),
        Lesson(
            "js-3",
            "Functions",
            "Create reusable code blocks",
            "Functions are reusable blocks of code. JavaScript supports function declarations, "
            "expressions, and arrow functions.",
            'const greet = (name) => {\n    return `Hello, ${name}!`;\n};\n\nconsole.log(greet("World"));',
            "Hello, World!",
        ),
        Lesson(
            "js-4",
            "Arrays and Methods",
            "Working with JavaScript arrays",
            "Arrays are ordered collections. JavaScript provides many built-in methods like map, "
            "filter, reduce, forEach, etc.",
            "const numbers = [1, 2, 3, 4, 5];\nconst doubled = numbers.map(n => n * 2);\n\nconsole.log(doubled);",
            "[2, 4, 6, 8, 10]",
        ),
        Lesson(
            "js-5",
            "Objects",
            "Master JavaScript objects",
            "Objects are collections of key-value pairs. They're fundamental to JavaScript and used everywhere.",
            'const person = {\n    name: "Bob",\n    age: 30,\n    greet() {\n'
            "        return `Hi, I'm ${this.name}`;\n    }\n};\n\nconsole.log(person.greet());",
            "Hi, I'm Bob",
        ),
    ],
}


def list_languages() -> list[Language]:
    return list(LANGUAGES.values())


def get_language(key: str) -> Language:
    return LANGUAGES[key]


def get_snippet(language: str, difficulty: str) -> PracticeSnippet:
    """Look up the practice text for a language/difficulty pair.

    The catalog is closed: an unknown key raises ``KeyError``.
    """
    text = SNIPPETS[language][difficulty]
    return PracticeSnippet(language=language, difficulty=difficulty, text=text)


def lessons_for(language: str) -> list[Lesson]:
    return LESSONS[language]


def random_quote() -> str:
    return random.choice(MOTIVATIONAL_QUOTES)
