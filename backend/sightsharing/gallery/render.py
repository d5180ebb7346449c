"""
SightSharing Gallery: HTML Renderer
===================================

What:  GalleryView → complete HTML page (Tailwind classes, /css/style.css).
How:   Plain string assembly; every user-supplied value goes through
       html.escape. Navigation is ordinary links (?page=, ?destination=) and
       the contribution form posts to /gallery/destinations, so the rendered
       page works without client-side scripting.
"""

from html import escape
from typing import List, Optional
from urllib.parse import urlencode

from sightsharing.gallery.view import CardView, DetailView, EditorView, GalleryView

INTRO_TITLE = "Discover and Share Your Travel Favorites"
INTRO_TEXT = (
    "Travelers from around the world share their most loved places here. "
    "From hidden gems to famous landmarks, find inspiration for your next "
    "adventure and share your own unforgettable experiences."
)


def _link(**params) -> str:
    query = {key: value for key, value in params.items() if value is not None}
    return "/?" + urlencode(query) if query else "/"


def _card(card: CardView, page: int) -> str:
    return (
        f'<a class="mb-4 rounded-lg shadow-lg overflow-hidden relative text-white block" '
        f'href="{escape(_link(page=page, destination=card.id))}">'
        f'<div class="bg-cover bg-center rounded-lg h-full w-full" '
        f"style=\"background-image: url('{escape(card.image_url)}')\"></div>"
        f'<div class="absolute bottom-0 left-0 bg-black bg-opacity-50 p-2 rounded-bl-lg w-full">'
        f'<h3 class="text-sm font-bold">{escape(card.name)}</h3></div></a>'
    )


def _pagination(view: GalleryView) -> str:
    parts: List[str] = []
    if view.show_previous:
        parts.append(f'<a id="prev-page" href="{escape(_link(page=view.page - 1))}">Previous</a>')
    parts.append(f'<span id="page-indicator">{view.page} / {view.page_count}</span>')
    if view.show_next:
        parts.append(f'<a id="next-page" href="{escape(_link(page=view.page + 1))}">Next</a>')
    return '<nav class="flex gap-4 text-white">' + "".join(parts) + "</nav>"


def _intro(page: int) -> str:
    return (
        '<div class="flex flex-col h-full p-4 justify-center items-start">'
        f'<h2 class="text-4xl font-bold text-white mb-4">{escape(INTRO_TITLE)}</h2>'
        f'<p class="text-lg text-white mb-4">{escape(INTRO_TEXT)}</p>'
        f'<a id="add-button" href="{escape(_link(page=page, editor="new"))}" '
        'class="bg-blue-500 hover:bg-blue-700 text-white font-bold py-2 px-4 rounded">'
        "Add a destination</a></div>"
    )


def _detail(detail: DetailView, page: int) -> str:
    return (
        '<div class="flex flex-col h-full p-4">'
        f'<h2 class="font-bold mb-2 text-white destination-name {detail.title_class}">'
        f"{escape(detail.name)}</h2>"
        f'<div class="text-xs mt-2 text-white">Location: {escape(detail.location)}</div>'
        f'<p class="text-lg text-white mt-2">{escape(detail.description)}</p>'
        f'<a class="text-white hover:text-green-500 font-bold py-2 mt-4" '
        f'href="{escape(detail.more_info_url)}" target="_blank" rel="noopener noreferrer">'
        "More information</a>"
        f'<a id="edit-button" data-destination-id="{detail.id}" '
        f'href="{escape(_link(page=page, destination=detail.id, editor="edit"))}" '
        'class="text-white font-bold py-2 mt-2">Edit</a></div>'
    )


def _editor(editor: EditorView) -> str:
    title = "Edit destination" if editor.mode == "edit" else "Add a destination"
    required = "" if editor.mode == "edit" else " required"
    delete_button = ""
    if editor.delete_action:
        # formaction: submits the same form to the delete handler
        delete_button = (
            f'<button type="submit" id="delete-button" formaction="{escape(editor.delete_action)}" '
            'formnovalidate>Delete</button>'
        )
    return (
        '<div id="contributionModal" class="fixed inset-0 bg-black bg-opacity-50">'
        f"<h2>{escape(title)}</h2>"
        f'<form id="contributionForm" action="{escape(editor.action)}" method="post" '
        'enctype="multipart/form-data">'
        f'<input type="hidden" name="page" value="{editor.page}">'
        f'<input name="name" value="{escape(editor.name)}"{required}>'
        f'<input name="location" value="{escape(editor.location)}"{required}>'
        f'<textarea name="description"{required}>{escape(editor.description)}</textarea>'
        '<input type="file" name="backgroundImage" accept="image/*">'
        '<input type="file" name="galleryImage" accept="image/*">'
        '<button type="submit">Submit</button>'
        f"{delete_button}"
        f'<a href="{escape(_link(page=editor.page))}" id="cancel-button">Cancel</a>'
        "</form></div>"
    )


def _notice(message: Optional[str]) -> str:
    if not message:
        return ""
    return f'<div id="notice-banner" role="status" class="bg-green-600 text-white p-2">{escape(message)}</div>'


def _error(message: Optional[str]) -> str:
    if not message:
        return ""
    return f'<div id="error-banner" role="alert" class="bg-red-600 text-white p-2">{escape(message)}</div>'


def render_page(view: GalleryView) -> str:
    body_style = ""
    if view.background_url:
        body_style = f" style=\"background-image: url('{escape(view.background_url)}')\""

    info = _detail(view.detail, view.page) if view.detail else _intro(view.page)
    cards = "".join(_card(card, view.page) for card in view.cards)
    editor = _editor(view.editor) if view.editor else ""

    return (
        "<!DOCTYPE html>"
        '<html lang="en"><head><meta charset="utf-8">'
        "<title>SightSharing</title>"
        '<link rel="stylesheet" href="/css/style.css"></head>'
        f"<body{body_style}>"
        f"{_error(view.error)}"
        f"{_notice(view.notice)}"
        f'<section id="info-section">{info}</section>'
        f'<section id="gallery-grid" class="grid grid-cols-3 gap-4">{cards}</section>'
        f"{_pagination(view)}"
        f"{editor}"
        "</body></html>"
    )
