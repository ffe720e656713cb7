import os
from dirview import App

app = App()


@app.expose
def disk_usage(path: str):
    """Total size of the regular files directly inside ``path``."""
    response = app.read_path(path)
    if not response.ok:
        return {"error": response.error.to_dict()}
    return sum(entry.size for entry in response.entries if entry.type.value == "file")


if __name__ == "__main__":
    app.run(os.path.expanduser("~"))
