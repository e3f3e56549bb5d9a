"""Shared fixtures: a small two-page project snapshot."""

from __future__ import annotations

import copy

import pytest

from stylegraph.project import Project


def node(node_id, node_type, value=None, **data):
    raw = {"id": node_id, "type": node_type}
    if value is not None:
        data["value"] = value
    if data:
        raw["data"] = data
    return raw


def wire(source, target, socket):
    return {"sourceNodeId": source, "targetNodeId": target, "targetSocketId": socket}


HOVER_BUTTON = {
    "id": "hover-button",
    "name": "Hover button",
    "nodes": [
        node("hover", "INTERACTION_HOVER"),
        node("on", "TEXT", "Hovered"),
        node("off", "TEXT", "Idle"),
        node("label", "IF_ELSE"),
        node("red", "COLOR", "red"),
        node("style", "STYLE"),
        node("out", "OUTPUT"),
    ],
    "connections": [
        wire("hover", "label", "in-condition"),
        wire("on", "label", "in-true"),
        wire("off", "label", "in-false"),
        wire("red", "style", "in-text"),
        wire("label", "out", "in-content"),
        wire("style", "out", "in-style"),
    ],
}

BLUE_TEXT = {
    "id": "blue-text",
    "name": "Blue text",
    "nodes": [node("blue", "COLOR", "blue"), node("style", "STYLE"), node("out", "OUTPUT")],
    "connections": [wire("blue", "style", "in-text"), wire("style", "out", "in-style")],
}

CLICK_TO_ABOUT = {
    "id": "click-to-about",
    "nodes": [node("click", "INTERACTION_CLICK"), node("go", "NAVIGATE", "about")],
    "connections": [wire("click", "go", "in-trigger")],
}

SPIN_ON_HOVER = {
    "id": "spin-on-hover",
    "nodes": [node("hover", "HOVER"), node("anim", "ANIMATION", "spin"), node("out", "OUTPUT")],
    "connections": [wire("hover", "anim", "in-trigger"), wire("anim", "out", "in-style")],
}

ALERT_ON_CLICK = {
    "id": "alert-on-click",
    "nodes": [node("click", "CLICK"), node("say", "ALERT", "Clicked!")],
    "connections": [wire("click", "say", "in-trigger")],
}

SNAPSHOT = {
    "width": 1440,
    "height": 900,
    "pages": [{"id": "home", "name": "Home"}, {"id": "about", "name": "About"}],
    "components": [HOVER_BUTTON],
    "scripts": [BLUE_TEXT, CLICK_TO_ABOUT, SPIN_ON_HOVER, ALERT_ON_CLICK],
    "elements": [
        {
            "id": "cta",
            "type": "CUSTOM",
            "pageId": "home",
            "x": 100,
            "y": 50,
            "width": 200,
            "height": 60,
            "style": {"backgroundColor": "#111", "color": "white"},
            "content": "Static",
            "customComponentId": "hover-button",
        },
        {
            "id": "title",
            "type": "HEADING",
            "pageId": "home",
            "x": 0,
            "y": 0,
            "width": 720,
            "height": 90,
            "style": {"color": "red", "fontSize": 32},
            "content": "Welcome",
            "scripts": ["blue-text", "missing-script"],
        },
        {
            "id": "card",
            "type": "CARD",
            "pageId": "home",
            "x": 360,
            "y": 300,
            "width": 400,
            "height": 200,
            "style": {"backgroundColor": "#eee"},
        },
        {
            "id": "card-label",
            "type": "PARAGRAPH",
            "pageId": "home",
            "parentId": "card",
            "x": 50,
            "y": 20,
            "width": 200,
            "height": 40,
            "content": "Inside </script> card",
        },
        {
            "id": "go-about",
            "type": "BUTTON",
            "pageId": "home",
            "x": 100,
            "y": 700,
            "width": 160,
            "height": 48,
            "content": "About us",
            "scripts": ["click-to-about", "alert-on-click"],
        },
        {
            "id": "spinner",
            "type": "BADGE",
            "pageId": "home",
            "x": 900,
            "y": 700,
            "width": 80,
            "height": 80,
            "content": "New",
            "scripts": ["spin-on-hover"],
        },
        {
            "id": "about-title",
            "type": "HEADING",
            "pageId": "about",
            "x": 0,
            "y": 0,
            "width": 720,
            "height": 90,
            "content": "About",
            "scripts": ["blue-text"],
        },
    ],
}


@pytest.fixture
def snapshot():
    """Raw project snapshot (a fresh copy per test)."""
    return copy.deepcopy(SNAPSHOT)


@pytest.fixture
def project(snapshot):
    return Project.from_dict(snapshot)
