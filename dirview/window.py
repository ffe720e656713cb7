import json
import logging
import webview
from .serializer import serialize, DirviewJSONEncoder

logger = logging.getLogger("Dirview.Window")


class Window:
    def __init__(self, title, url=None, html=None, width=800, height=600,
                 resizable=True, min_size=(200, 100), hidden=False,
                 on_loaded=None, on_closed=None, **kwargs):
        self.title = title
        self.url = url
        self.html = html
        self.width = width
        self.height = height
        self.resizable = resizable
        self.min_size = min_size
        self.hidden = hidden

        # Events
        self.on_loaded = on_loaded
        self.on_closed = on_closed

        self._window = None
        self._exposed_functions = {}

    @property
    def is_open(self):
        return self._window is not None

    def expose(self, func=None, name=None):
        """
        Expose a Python function to JavaScript. Can be used as a decorator.
        @window.expose
        def my_func(): ...
        """
        if self._window:
            raise RuntimeError("Cannot expose functions after window creation.")

        if func is None:
            def decorator(f):
                self.expose(f, name=name)
                return f
            return decorator

        if name is None:
            name = func.__name__
        self._exposed_functions[name] = func
        return func

    def emit(self, event, data=None):
        """
        Emit an event to the JavaScript frontend.
        """
        if not self._window:
            return
        try:
            payload = json.dumps(data, cls=DirviewJSONEncoder)
            call_args = json.dumps([event, payload])
            self._window.evaluate_js(f"window.__dirview_dispatch(...{call_args})")
        except Exception as e:
            logger.warning(f"Failed to emit event '{event}': {e}")

    def _build_api(self):
        methods = {}

        def create_wrapper(name, func):
            # pywebview calls these as bound methods; drop the api instance.
            def wrapper(api_self, *args, _func=func, **kwargs):
                logger.debug(f"Bridge call: {name} {args}")
                return serialize(_func(*args, **kwargs))
            return wrapper

        for name, func in self._exposed_functions.items():
            methods[name] = create_wrapper(name, func)

        DynamicApi = type("DynamicApi", (object,), methods)
        logger.debug(f"Built API with methods: {list(methods.keys())}")
        return DynamicApi()

    def create(self):
        self._window = webview.create_window(
            self.title,
            url=self.url,
            html=self.html,
            js_api=self._build_api(),
            width=self.width,
            height=self.height,
            resizable=self.resizable,
            min_size=self.min_size,
            hidden=self.hidden,
        )

        if self.on_loaded:
            self._window.events.loaded += self.on_loaded
        self._window.events.closed += self._handle_closed
        return self

    def _handle_closed(self):
        self._window = None
        if self.on_closed:
            self.on_closed(self)

    def destroy(self):
        if self._window:
            try:
                self._window.destroy()
            except Exception as e:
                logger.debug(f"Error destroying window: {e}")
            self._window = None
