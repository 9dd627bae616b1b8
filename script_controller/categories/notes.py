"""Apple Notes actions.

* create: create a new note
* read: get the body of a note
* update: replace the body of a note
* delete: delete a note
* list: list the notes in a folder
* list_folders: list all folders
* create_folder: create a folder
* delete_folder: delete a folder
* show: reveal a note in the Notes UI
* move: move a note to another folder

Every value interpolated below goes through ``quote_applescript_string``.
"Not found" style outcomes are returned by the script as ordinary text.
"""

from __future__ import annotations

from typing import Any, Mapping

from script_controller.templates import (
    dedent_script,
    quote_applescript_list,
    quote_applescript_string as q,
)

ACCOUNT = "iCloud"
DEFAULT_FOLDER = "Notes"
PROTECTED_FOLDERS = [DEFAULT_FOLDER]

_TITLE = {"type": "string", "description": "Note title"}
_FOLDER = {
    "type": "string",
    "description": "Folder name (optional)",
    "default": DEFAULT_FOLDER,
}
_FOLDER_NAME = {"type": "string", "description": "Folder name"}


def _folder(args: Mapping[str, Any], key: str = "folder") -> str:
    # An empty folder name means the default folder, same as omitting it.
    return args.get(key) or DEFAULT_FOLDER


def _sq(value: str) -> str:
    return f"'{value}'"


def _find_note(title: str) -> str:
    return dedent_script(
        f"""
        set matchingNotes to (every note whose name = {q(title)})
        if length of matchingNotes is 0 then
          return {q(f"Note {_sq(title)} not found")}
        end if
        """
    )


def _in_folder(folder: str, body: str) -> str:
    lines = [
        'tell application "Notes"',
        f"  tell account {q(ACCOUNT)}",
        f"    tell folder {q(folder)}",
    ]
    lines.extend("      " + line if line else line for line in body.splitlines())
    lines.extend(["    end tell", "  end tell", "end tell"])
    return "\n".join(lines) + "\n"


def create_note(args: Mapping[str, Any]) -> str:
    title = args["title"]
    body = (
        f"make new note with properties {{name:{q(title)}, body:{q(args['content'])}}}\n"
        f"return {q(f'Note {_sq(title)} created successfully')}\n"
    )
    return _in_folder(_folder(args), body)


def read_note(args: Mapping[str, Any]) -> str:
    title = args["title"]
    body = _find_note(title) + "return body of (item 1 of matchingNotes)\n"
    return _in_folder(_folder(args), body)


def update_note(args: Mapping[str, Any]) -> str:
    title = args["title"]
    body = (
        _find_note(title)
        + "set theNote to item 1 of matchingNotes\n"
        + f"set body of theNote to {q(args['content'])}\n"
        + f"return {q(f'Note {_sq(title)} updated successfully')}\n"
    )
    return _in_folder(_folder(args), body)


def delete_note(args: Mapping[str, Any]) -> str:
    title = args["title"]
    body = (
        _find_note(title)
        + "delete item 1 of matchingNotes\n"
        + f"return {q(f'Note {_sq(title)} deleted successfully')}\n"
    )
    return _in_folder(_folder(args), body)


def list_notes(args: Mapping[str, Any]) -> str:
    folder = _folder(args)
    body = dedent_script(
        f"""
        set noteList to ""
        repeat with theNote in notes
          set noteList to noteList & name of theNote & linefeed
        end repeat
        if noteList is "" then
          return {q(f"No notes found in folder {_sq(folder)}")}
        end if
        return noteList
        """
    )
    return _in_folder(folder, body)


LIST_FOLDERS_SCRIPT = dedent_script(
    f"""
    tell application "Notes"
      tell account {q(ACCOUNT)}
        set folderList to ""
        repeat with theFolder in folders
          set folderList to folderList & name of theFolder & linefeed
        end repeat
        if folderList is "" then
          return "No folders found"
        end if
        return folderList
      end tell
    end tell
    """
)


def create_folder(args: Mapping[str, Any]) -> str:
    name = args["name"]
    return dedent_script(
        f"""
        tell application "Notes"
          tell account {q(ACCOUNT)}
            try
              if exists folder {q(name)} then
                return {q(f"Folder {_sq(name)} already exists")}
              end if
              make new folder with properties {{name:{q(name)}}}
              return {q(f"Folder {_sq(name)} created successfully")}
            on error errMsg
              return "Failed to create folder: " & errMsg
            end try
          end tell
        end tell
        """
    )


def delete_folder(args: Mapping[str, Any]) -> str:
    name = args["name"]
    return dedent_script(
        f"""
        tell application "Notes"
          tell account {q(ACCOUNT)}
            try
              if not (exists folder {q(name)}) then
                return {q(f"Folder {_sq(name)} not found")}
              end if
              if {q(name)} is in {quote_applescript_list(PROTECTED_FOLDERS)} then
                return {q(f"Cannot delete default folder {_sq(name)}")}
              end if
              delete folder {q(name)}
              return {q(f"Folder {_sq(name)} deleted successfully")}
            on error errMsg
              return "Failed to delete folder: " & errMsg
            end try
          end tell
        end tell
        """
    )


def show_note(args: Mapping[str, Any]) -> str:
    title = args["title"]
    body = (
        _find_note(title)
        + "set theNote to item 1 of matchingNotes\n"
        + "show theNote\n"
        + "activate\n"
        + f"return {q(f'Note {_sq(title)} shown in UI')}\n"
    )
    return _in_folder(_folder(args), body)


def move_note(args: Mapping[str, Any]) -> str:
    title = args["title"]
    to_folder = args["to_folder"]
    from_folder = _folder(args, "from_folder")
    return dedent_script(
        f"""
        tell application "Notes"
          tell account {q(ACCOUNT)}
            try
              set destFolder to folder {q(to_folder)}
            on error
              return {q(f"Destination folder {_sq(to_folder)} not found")}
            end try

            try
              tell folder {q(from_folder)}
                set matchingNotes to (every note whose name = {q(title)})
                if length of matchingNotes is 0 then
                  return {q(f"Note {_sq(title)} not found")}
                end if
                set theNote to item 1 of matchingNotes
                move theNote to destFolder
                return {q(f"Note {_sq(title)} moved to {_sq(to_folder)} successfully")}
              end tell
            on error errMsg
              return "Failed to move note: " & errMsg
            end try
          end tell
        end tell
        """
    )


NOTES_CATEGORY: dict[str, Any] = {
    "name": "notes",
    "description": "Apple Notes operations",
    "scripts": [
        {
            "name": "create",
            "description": "Create a new note in Apple Notes app",
            "schema": {
                "type": "object",
                "properties": {
                    "title": _TITLE,
                    "content": {"type": "string", "description": "Note content"},
                    "folder": _FOLDER,
                },
                "required": ["title", "content"],
            },
            "script": create_note,
        },
        {
            "name": "read",
            "description": "Get content of a note in Apple Notes app",
            "schema": {
                "type": "object",
                "properties": {"title": _TITLE, "folder": _FOLDER},
                "required": ["title"],
            },
            "script": read_note,
        },
        {
            "name": "update",
            "description": "Update an existing note in Apple Notes app",
            "schema": {
                "type": "object",
                "properties": {
                    "title": _TITLE,
                    "content": {"type": "string", "description": "New note content"},
                    "folder": _FOLDER,
                },
                "required": ["title", "content"],
            },
            "script": update_note,
        },
        {
            "name": "delete",
            "description": "Delete a note in Apple Notes app",
            "schema": {
                "type": "object",
                "properties": {"title": _TITLE, "folder": _FOLDER},
                "required": ["title"],
            },
            "script": delete_note,
        },
        {
            "name": "list",
            "description": "List all notes in a folder in Apple Notes app",
            "schema": {"type": "object", "properties": {"folder": _FOLDER}},
            "script": list_notes,
        },
        {
            "name": "list_folders",
            "description": "List all folders in Notes in Apple Notes app",
            "script": LIST_FOLDERS_SCRIPT,
        },
        {
            "name": "create_folder",
            "description": "Create a new folder",
            "schema": {
                "type": "object",
                "properties": {"name": _FOLDER_NAME},
                "required": ["name"],
            },
            "script": create_folder,
        },
        {
            "name": "delete_folder",
            "description": "Delete a folder in Apple Notes app",
            "schema": {
                "type": "object",
                "properties": {"name": _FOLDER_NAME},
                "required": ["name"],
            },
            "script": delete_folder,
        },
        {
            "name": "show",
            "description": "Show a note in the UI in Apple Notes app",
            "schema": {
                "type": "object",
                "properties": {"title": _TITLE, "folder": _FOLDER},
                "required": ["title"],
            },
            "script": show_note,
        },
        {
            "name": "move",
            "description": "Move a note to a different folder in Apple Notes app",
            "schema": {
                "type": "object",
                "properties": {
                    "title": _TITLE,
                    "from_folder": {
                        "type": "string",
                        "description": "Source folder name (optional)",
                        "default": DEFAULT_FOLDER,
                    },
                    "to_folder": {"type": "string", "description": "Destination folder name"},
                },
                "required": ["title", "to_folder"],
            },
            "script": move_note,
        },
    ],
}
