import logging
import os
from dataclasses import dataclass
import click
from mingit.objects import *
from mingit.objects.stores.file import FileObjectStore
from mingit.objects.stores.lmdb import SharedEnvironment, LmdbObjectStore

# Command line interface to a git-like object store.
# It utilizes the 'click' library.

@dataclass
class RepoContext:
    verbose:bool
    work_dir:str
    git_dir:str
    store_type:str

    def init_store(self) -> ObjectStore:
        if(self.store_type == "lmdb"):
            #check if the git dir has been initialized with loose object files
            objects_dir = os.path.join(self.git_dir, "objects")
            if os.path.isdir(objects_dir) and len(os.listdir(objects_dir)) > 0:
                raise click.ClickException(f"git directory '{self.git_dir}' already holds loose objects. Cannot use 'lmdb' store.")
            return LmdbObjectStore(SharedEnvironment(self.git_dir))
        elif(self.store_type == "file"):
            #check if the git dir has been initialized with an lmdb store
            if os.path.exists(os.path.join(self.git_dir, "data.mdb")) or os.path.exists(os.path.join(self.git_dir, "lock.mdb")):
                raise click.ClickException(f"git directory '{self.git_dir}' has already been initialized with an 'lmdb' store. Cannot use 'file' store.")
            return FileObjectStore(self.git_dir)
        else:
            raise click.ClickException(f"Unknown store type '{self.store_type}'.")

    def enforce_paths_exist(self):
        if not os.path.isdir(self.work_dir):
            raise click.ClickException(f"work directory '{self.work_dir}' does not exist.")
        if not os.path.isdir(self.git_dir):
            raise click.ClickException(f"git directory '{self.git_dir}' does not exist. Run 'init' first.")

class ObjectIdParamType(click.ParamType):
    name = "object_id"

    def convert(self, value, param, ctx):
        if isinstance(value, ObjectId):
            return value
        try:
            return ObjectId.validate(value)
        except InvalidObjectIdError as e:
            self.fail(str(e), param, ctx)

OBJECT_ID = ObjectIdParamType()

def init_repository(git_dir:str) -> None:
    os.makedirs(os.path.join(git_dir, "objects"), exist_ok=True)
    os.makedirs(os.path.join(git_dir, "refs"), exist_ok=True)
    with open(os.path.join(git_dir, "HEAD"), "w") as f:
        f.write("ref: refs/heads/main\n")

@click.group()
@click.pass_context
@click.option("--work-dir", "-d", envvar="MINGIT_WORK_DIR", help="Work directory. By default, uses the current directory.")
@click.option("--git-dir", envvar="MINGIT_DIR", help="Metadata directory. By default, '.git' inside the work directory.")
@click.option("--store-type", envvar="MINGIT_STORE_TYPE", default="file", show_default=True,
              type=click.Choice(['file', 'lmdb'], case_sensitive=False), help="What type of object store to use.")
@click.option("--verbose", "-v", is_flag=True, help="Will print verbose messages.")
def cli(ctx:click.Context, verbose:bool, work_dir:str|None, git_dir:str|None, store_type:str):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    if(work_dir is None):
        work_dir = os.getcwd()
    if(git_dir is None):
        git_dir = os.path.join(work_dir, ".git")
    if(not os.path.exists(work_dir)):
        raise click.ClickException(f"Work directory '{work_dir}' (absolute: '{os.path.abspath(work_dir)}') does not exist.")
    ctx.obj = RepoContext(
        verbose=verbose,
        work_dir=work_dir,
        git_dir=git_dir,
        store_type=store_type.lower())

#===========================================================
# 'init' command
#===========================================================
@cli.command()
@click.pass_context
def init(ctx:click.Context):
    repo_ctx:RepoContext = ctx.obj
    try:
        init_repository(repo_ctx.git_dir)
    except OSError as e:
        raise click.ClickException(f"Could not initialize '{repo_ctx.git_dir}': {e}") from e
    print("Initialized git directory")

#===========================================================
# 'hash-object' command
#===========================================================
@cli.command("hash-object")
@click.pass_context
@click.option("--write", "-w", is_flag=True, help="Also write the blob into the object store.")
@click.argument("file", type=click.Path(dir_okay=False))
def hash_object_cmd(ctx:click.Context, write:bool, file:str):
    repo_ctx:RepoContext = ctx.obj
    file_path = os.path.join(repo_ctx.work_dir, file)
    try:
        store = None
        if write:
            repo_ctx.enforce_paths_exist()
            store = repo_ctx.init_store()
        object_id = hash_file(store, file_path, write=write)
    except ObjectStoreError as e:
        raise click.ClickException(str(e)) from e
    print(object_id)

#===========================================================
# 'cat-file' command
#===========================================================
@cli.command("cat-file")
@click.pass_context
@click.option("--pretty", "-p", "pretty", is_flag=True, help="Print the object content (the default).")
@click.option("--type", "-t", "show_type", is_flag=True, help="Show the object kind instead of its content.")
@click.option("--size", "-s", "show_size", is_flag=True, help="Show the declared object size instead of its content.")
@click.argument("object_id", metavar="OBJECT", type=OBJECT_ID)
def cat_file(ctx:click.Context, pretty:bool, show_type:bool, show_size:bool, object_id:ObjectId):
    repo_ctx:RepoContext = ctx.obj
    if pretty + show_type + show_size > 1:
        raise click.UsageError("Only one of '-p', '-t', and '-s' can be used.")
    repo_ctx.enforce_paths_exist()
    try:
        envelope = read_object(repo_ctx.init_store(), object_id)
    except ObjectStoreError as e:
        raise click.ClickException(str(e)) from e
    if show_type:
        print(envelope.kind)
    elif show_size:
        print(envelope.size)
    else:
        click.echo(envelope.payload, nl=False)

#===========================================================
# 'ls-tree' command
#===========================================================
@cli.command("ls-tree")
@click.pass_context
@click.option("--name-only", is_flag=True, help="List only the entry names.")
@click.argument("tree_id", metavar="TREE", type=OBJECT_ID)
def ls_tree(ctx:click.Context, name_only:bool, tree_id:ObjectId):
    repo_ctx:RepoContext = ctx.obj
    repo_ctx.enforce_paths_exist()
    try:
        entries = list_tree(repo_ctx.init_store(), tree_id)
    except ObjectStoreError as e:
        raise click.ClickException(str(e)) from e
    for entry in entries:
        print(format_entry(entry, name_only=name_only))

#===========================================================
# 'write-tree' command
#===========================================================
@cli.command("write-tree")
@click.pass_context
@click.option("--quiet", "-q", is_flag=True, help="Do not print the tree id.")
@click.argument("path", required=False, type=click.Path(file_okay=False))
def write_tree(ctx:click.Context, quiet:bool, path:str|None):
    repo_ctx:RepoContext = ctx.obj
    repo_ctx.enforce_paths_exist()
    dir_path = repo_ctx.work_dir if path is None else os.path.join(repo_ctx.work_dir, path)
    #never descend into the metadata directory itself, whatever it is called
    exclude_paths = {os.path.realpath(repo_ctx.git_dir)}
    try:
        tree_id = build_tree(repo_ctx.init_store(), dir_path, exclude_paths=exclude_paths)
    except ObjectStoreError as e:
        raise click.ClickException(str(e)) from e
    if not quiet:
        print(tree_id)

if __name__ == '__main__':
    cli(None)
