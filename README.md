# codeagent

A small interactive terminal assistant. It keeps its settings in
`~/.codeagent/config.json` (under `$HOME`), asks for your name, a model and an
API key on first start, and then lets you send questions and code-formatting
requests to a chat-completion API from a prompt.

## Installation

```
pip install .
```

## Running

```
codeagent
```

On the first run you are asked for:

- your name,
- a model, picked from a numbered list (`o4-mini`, `o3`, `o3-mini`, `o1`,
  `claude-2`) by number or by name; an empty answer picks the first one,
- your API key.

The key is checked with a short request while a spinner runs. If the request
fails, the configuration file is removed, you are told to restart, and the
program ends. Afterwards you are asked once for a working directory, which is
stored in the configuration and used to look up files by name.

Every model is sent to the same endpoint,
`https://api.openai.com/v1/chat/completions`, with a `Bearer` authorization
header.

The program stops on `/exit`, at end of input, on Ctrl+C, or on SIGTERM.

## Commands

Anything you type that does not start with `/` is sent as a plain question,
and the raw response body is printed.

| Command | Alias | What it does |
|---------|-------|--------------|
| `/help` | `/h` | List all available commands |
| `/query <question>` | `/q` | Ask a question |
| `/format <file> <message>` | `/fmt` | Send a file from the working directory to be formatted; `file:<name>` may also be used to name the file |
| `/clear` | `/cls` | Clear the terminal |
| `/exit` | | Leave the program |

An unknown command is sent as a question. File names are matched
case-insensitively anywhere below the working directory.

## What it does not do

- `/format` prints the model's answer; it does not write anything back to the
  file.
- Answers are printed as the API returns them (the raw JSON body); there is no
  streaming and no conversation history is kept between questions.

## Using it as a library

```python
from codeagent.config import Config, init_session
from codeagent.llm import Client, query

cfg = Config(api_key="placeholder", session=init_session("Ada", "o4-mini"))
client = Client(cfg)
print(query(client, "What is a goroutine?").decode())
```

Other helpers:

- `codeagent.parser`: `lang_from_ext`, `parse_code`, `parse_code_request`,
  `extract_first_code_block` (raises `NoCodeBlockError`).
- `codeagent.fs`: `find_file`, `read_file`, `write_file`,
  `get_current_working_directory`.
- `codeagent.validators`: `validate_name`, `validate_api_key`,
  `validate_working_directory` (raise `ValidationError`).
- `codeagent.commands`: `CommandProcessor`, `extract_command_from_input`,
  `extract_files_from_input`, `normalize_cmd`, `register_commands`.
- `codeagent.spinner`: `Spinner` (also a context manager), `show_loader`,
  `stop_loader`.
- `codeagent.prompts`: `prompt` and the named prompts, each taking an optional
  `reader` and `stream`.

A `401` response removes the configuration file and raises
`codeagent.config.SessionInvalidated`; other error statuses raise
`codeagent.llm.APIError`.

## Tests

```
pip install .[test]
pytest
```