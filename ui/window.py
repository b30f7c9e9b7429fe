import gi
gi.require_version('Gtk', '4.0')
from gi.repository import Gtk, GLib, Gio, Pango

from services.app_logic import AppLogic
from models.dependency import Dependency
from models.dependency_gobject import DependencyGObject

class NpmUpdaterWindow(Gtk.ApplicationWindow):
    __gtype_name__ = 'NpmUpdaterWindow'

    def __init__(self, *args, project_root=None, settings=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.set_title("Node.js Updater")
        self.set_default_size(760, 620)

        # Flat list of outdated dependencies, no children
        self.list_store = Gio.ListStore(item_type=DependencyGObject)
        self.selection_model = Gtk.SingleSelection(model=self.list_store)
        self.selection_model.set_autoselect(False)
        self.selection_model.connect("selection-changed", self.on_selection_changed)

        self._build_widgets()

        # --- Setup AppLogic ---
        logic_callbacks = {
            'log_output': self.log_output,
            'set_status': self.status_label.set_text,
            'update_dependency_list': self.update_dependency_list_store,
            'show_error_dialog': self.show_error_dialog,
            'ask_confirmation': self.ask_confirmation,
            'open_uri': self.open_uri,
        }
        self.logic = AppLogic(callbacks=logic_callbacks, project_root=project_root, settings=settings)

        self.log_output(f"Project: {project_root or 'none'}")
        self.logic.load_dependencies()

    # --- UI Setup ---
    def _build_widgets(self):
        root = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=6)
        for side in ("top", "bottom", "start", "end"):
            getattr(root, f"set_margin_{side}")(8)
        self.set_child(root)

        toolbar = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=6)
        self.refresh_button = Gtk.Button(label="Refresh")
        self.update_button = Gtk.Button(label="Update to Latest")
        self.update_all_button = Gtk.Button(label="Update All")
        self.changelog_button = Gtk.Button(label="Open on npm")
        self.help_button = Gtk.Button(label="Help")
        self.refresh_button.connect("clicked", self.on_refresh_clicked)
        self.update_button.connect("clicked", self.on_update_clicked)
        self.update_all_button.connect("clicked", self.on_update_all_clicked)
        self.changelog_button.connect("clicked", self.on_changelog_clicked)
        self.help_button.connect("clicked", self.on_help_clicked)
        for button in (self.refresh_button, self.update_button, self.update_all_button,
                       self.changelog_button, self.help_button):
            toolbar.append(button)
        root.append(toolbar)

        factory = Gtk.SignalListItemFactory()
        factory.connect("setup", self._setup_row)
        factory.connect("bind", self._bind_row)
        self.list_view = Gtk.ListView(model=self.selection_model, factory=factory)
        list_scroller = Gtk.ScrolledWindow(vexpand=True)
        list_scroller.set_child(self.list_view)
        root.append(list_scroller)

        self.output_textview = Gtk.TextView(editable=False, monospace=True, wrap_mode=Gtk.WrapMode.WORD_CHAR)
        self.log_buffer = self.output_textview.get_buffer()
        self.log_buffer.create_tag("header", weight=Pango.Weight.BOLD)
        log_scroller = Gtk.ScrolledWindow(min_content_height=160)
        log_scroller.set_child(self.output_textview)
        root.append(log_scroller)

        self.status_label = Gtk.Label(xalign=0)
        root.append(self.status_label)

        self._update_button_sensitivity()

    def _setup_row(self, factory, list_item):
        box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=2)
        box.append(Gtk.Label(xalign=0))
        description = Gtk.Label(xalign=0)
        description.add_css_class("dim-label")
        box.append(description)
        list_item.set_child(box)

    def _bind_row(self, factory, list_item):
        item = list_item.get_item()
        if not item: return
        box = list_item.get_child()
        name_label = box.get_first_child()
        name_label.set_text(item.props.label)
        name_label.get_next_sibling().set_text(item.props.description)
        box.set_tooltip_text(item.props.tooltip)

    # --- UI Update Callbacks (from AppLogic to UI) ---
    def update_dependency_list_store(self, dependencies: list[Dependency]):
        """Replaces the whole list with freshly built records."""
        self.list_store.remove_all()
        for dep in dependencies:
            self.list_store.append(DependencyGObject(dep))
        self._update_button_sensitivity()

    def show_error_dialog(self, message: str):
        dialog = Gtk.MessageDialog(transient_for=self, modal=True, message_type=Gtk.MessageType.ERROR,
                                   buttons=Gtk.ButtonsType.CLOSE, text=message)
        dialog.connect("response", lambda d, r: d.destroy())
        dialog.present()

    def ask_confirmation(self, message: str, accept_label: str, on_response):
        dialog = Gtk.MessageDialog(transient_for=self, modal=True, message_type=Gtk.MessageType.WARNING,
                                   text=message)
        dialog.add_button("Cancel", Gtk.ResponseType.CANCEL)
        dialog.add_button(accept_label, Gtk.ResponseType.ACCEPT)

        def on_dialog_response(d, response_id):
            d.destroy()
            on_response(response_id == Gtk.ResponseType.ACCEPT)

        dialog.connect("response", on_dialog_response)
        dialog.present()

    def open_uri(self, url: str):
        Gtk.UriLauncher(uri=url).launch(self, None, self._on_uri_launched)

    def _on_uri_launched(self, launcher, result):
        try:
            launcher.launch_finish(result)
        except GLib.Error as e:
            self.log_output(f"Error: Could not open {launcher.get_uri()}: {e.message}")

    def _selected_dependency(self) -> Dependency | None:
        item = self.selection_model.get_selected_item()
        return item.get_dependency() if item else None

    def _update_button_sensitivity(self):
        has_selection = self._selected_dependency() is not None
        self.update_button.set_sensitive(has_selection)
        self.changelog_button.set_sensitive(has_selection)

    # --- UI Event Handlers (from User to AppLogic) ---
    def on_refresh_clicked(self, widget):
        self.logic.refresh()

    def on_update_clicked(self, widget):
        dep = self._selected_dependency()
        self.logic.update_dependency(dep.name if dep else None)

    def on_update_all_clicked(self, widget):
        self.logic.update_all_dependencies()

    def on_changelog_clicked(self, widget):
        dep = self._selected_dependency()
        if dep:
            self.logic.open_package_page(dep.name)

    def on_help_clicked(self, widget):
        self.logic.show_help()

    def on_selection_changed(self, selection, position, n_items):
        self._update_button_sensitivity()

    # --- Logging ---
    def log_output(self, message: str, is_header: bool = False):
        end_iter = self.log_buffer.get_end_iter()
        if is_header:
            if self.log_buffer.get_char_count() > 0: self.log_buffer.insert(end_iter, "\n")
            self.log_buffer.insert_with_tags_by_name(self.log_buffer.get_end_iter(), f"--- {message} ---\n", "header")
        else:
            self.log_buffer.insert(self.log_buffer.get_end_iter(), f"{message}\n")

        GLib.idle_add(self._scroll_output_to_end)

    def _scroll_output_to_end(self):
        adj = self.output_textview.get_parent().get_vadjustment()
        adj.set_value(adj.get_upper())
        return False
