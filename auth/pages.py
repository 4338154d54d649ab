"""HTML fragments for the members app pages.

User-supplied values are escaped before they reach the markup.
"""

from html import escape


def home_page() -> str:
    return (
        '<a href="/signup"><button>Sign up</button></a><br/>'
        '<a href="/login"><button>Log in</button></a>'
    )


def signup_page() -> str:
    return (
        "<p>Create a new user</p>"
        '<form method="post" action="/signupSubmit">'
        '<input type="text" placeholder="name" name="name" required/><br/>'
        '<input type="email" placeholder="email" name="email" required/><br/>'
        '<input type="password" placeholder="password" name="password" required/><br/>'
        '<input type="submit" value="Submit"/>'
        "</form>"
    )


def login_page() -> str:
    return (
        "<p>log in</p>"
        '<form method="post" action="/loginSubmit">'
        '<input type="text" placeholder="email" name="email" required/><br/>'
        '<input type="password" placeholder="password" name="password" required/><br/>'
        '<input type="submit" value="Login"/>'
        "</form>"
    )


def retry_page(message: str, retry_path: str) -> str:
    """Error message with a link back to the form."""
    return f'<p>{escape(message)}</p><br/><a href="{escape(retry_path)}">Try again</a>'


def members_page(name: str, image_number: int) -> str:
    return (
        f"<h1>Hello, {escape(name)}!</h1><br/><br/>"
        f'<img src="/{image_number}.jpg"><br/>'
        '<a href="/logout"><button>Sign out</button></a>'
    )


def not_found_page() -> str:
    return (
        "<h1>Four oh four. Something went wrong! "
        "Maybe you went somewhere that doesn't exist.</h1>"
    )


def error_page() -> str:
    return '<h1>Something went wrong on our end.</h1><a href="/">Back to home</a>'
